# SPDX-License-Identifier: MIT

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from timeblocks.model.block import Block
from timeblocks.query.sort import sort_entry_positions
from timeblocks.service.aggregation import get_block_summary, is_breakdown_shown
from timeblocks.service.duration import entry_minutes
from timeblocks.time import format_duration
from timeblocks.view.view.util import sort_label, summary_table


def block_view(block: Block, quantize: bool) -> None:
    """
    Display one tracker block: its rows in the block's sort order, the total
    and, when there is more than one project or activity, the breakdowns.

    The ``#`` column is the row's storage position, used by modify/remove.
    """
    console = Console()
    entries = block["entries"]

    console.print(
        f"[bold]tracker {block['tracker_id']}[/bold]"
        f"  date: {block['reference_date']}"
        f"  sort: {sort_label(block['sort'])}"
    )

    block_table = Table(box=box.SIMPLE)
    block_table.add_column("#", justify="right")
    block_table.add_column("date")
    block_table.add_column("start")
    block_table.add_column("end")
    block_table.add_column("hours", justify="right")
    block_table.add_column("project")
    block_table.add_column("activity")

    for position in sort_entry_positions(entries, block["sort"]):
        entry = entries[position]
        block_table.add_row(
            str(position),
            entry["date"],
            entry["start"],
            entry["end"],
            format_duration(entry_minutes(entry, quantize)),
            escape(entry["project"]),
            escape(entry["activity"]),
        )

    summary = get_block_summary(entries, quantize)
    block_table.add_section()
    total = format_duration(summary["total"])
    block_table.add_row("", "[bold]total[/bold]", "", "", f"[bold]{total}[/bold]")
    console.print(block_table)

    if is_breakdown_shown(summary["projects"]):
        console.print(summary_table("projects", "project", summary["projects"]))
    if is_breakdown_shown(summary["activities"]):
        console.print(summary_table("activities", "activity", summary["activities"]))
