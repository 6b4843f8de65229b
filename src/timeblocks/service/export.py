# SPDX-License-Identifier: MIT

from typing import Optional

from timeblocks.model.time_entry import TimeEntry
from timeblocks.service.duration import entry_minutes
from timeblocks.time import format_duration, is_date_in_range

CSV_COLUMNS = ["date", "start", "end", "project", "activity", "hours"]


def filter_entries(
    entries: list[TimeEntry],
    date_start: str,
    date_end: str,
    project: Optional[str] = None,
) -> list[TimeEntry]:
    """Entries dated within ``date_start``..``date_end`` (inclusive), in input order.

    ``project`` is an exact match; None or "" disables the project filter.
    """
    return [
        entry
        for entry in entries
        if is_date_in_range(entry["date"], date_start, date_end)
        and (not project or entry["project"] == project)
    ]


def entries_to_csv(entries: list[TimeEntry], quantize: bool) -> str:
    # Values are written verbatim: a comma inside project or activity shifts
    # the remaining columns of that row.
    lines = [",".join(CSV_COLUMNS)]
    for entry in entries:
        hours = format_duration(entry_minutes(entry, quantize))
        lines.append(
            ",".join(
                [
                    entry["date"],
                    entry["start"],
                    entry["end"],
                    entry["project"],
                    entry["activity"],
                    hours,
                ]
            )
        )
    return "\n".join(lines)


def export_filename(date_start: str, date_end: str) -> str:
    return f"time-export-{date_start}-bis-{date_end}.csv"
