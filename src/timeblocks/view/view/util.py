# SPDX-License-Identifier: MIT

from rich import box
from rich.table import Table

from timeblocks.model.storage import SortPreference
from timeblocks.time import format_duration

SORT_LABELS: dict[SortPreference, str] = {
    "none": "none",
    "start": "start time",
    "project": "project",
}


def sort_label(sort: SortPreference) -> str:
    return SORT_LABELS[sort]


def summary_table(title: str, key_column: str, sums: dict[str, int]) -> Table:
    table = Table(title=title, box=box.SIMPLE, title_justify="left")
    table.add_column(key_column)
    table.add_column("hours", justify="right")
    for key, minutes in sums.items():
        table.add_row(key, format_duration(minutes))
    return table
