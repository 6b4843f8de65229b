# SPDX-License-Identifier: MIT

from rich import box
from rich.console import Console
from rich.table import Table

from timeblocks.model.block import Block
from timeblocks.service.aggregation import total_minutes
from timeblocks.time import format_duration
from timeblocks.view.view.util import sort_label
from timeblocks.view.view.views.header import header


def trackers_view(blocks: list[Block], quantize: bool) -> None:
    """Display every known tracker block with its row count and total."""
    header("all trackers", "tracker-list")

    trackers_table = Table(box=box.SIMPLE)
    trackers_table.add_column("id")
    trackers_table.add_column("date")
    trackers_table.add_column("sort")
    trackers_table.add_column("rows", justify="right")
    trackers_table.add_column("total", justify="right")

    for block in blocks:
        trackers_table.add_row(
            block["tracker_id"],
            block["reference_date"],
            sort_label(block["sort"]),
            str(len(block["entries"])),
            format_duration(total_minutes(block["entries"], quantize)),
        )

    console = Console()
    console.print(trackers_table)
