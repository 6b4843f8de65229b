# SPDX-License-Identifier: MIT

from typing import Any, Literal

from timeblocks.model.time_entry import TimeEntry
from timeblocks.service.duration import entry_minutes

SummaryKey = Literal["project", "activity"]


def total_minutes(entries: list[TimeEntry], quantize: bool) -> int:
    return sum(entry_minutes(entry, quantize) for entry in entries)


def minutes_by_key(
    entries: list[TimeEntry], key: SummaryKey, quantize: bool
) -> dict[str, int]:
    """
    Sum durations per trimmed ``key`` value.

    Entries with an empty or whitespace-only value are skipped. Keys keep the
    order in which they first appear.
    """
    sums: dict[str, int] = {}
    for entry in entries:
        value = (entry[key] or "").strip()
        if not value:
            continue
        sums[value] = sums.get(value, 0) + entry_minutes(entry, quantize)
    return sums


def minutes_by_project(entries: list[TimeEntry], quantize: bool) -> dict[str, int]:
    return minutes_by_key(entries, "project", quantize)


def minutes_by_activity(entries: list[TimeEntry], quantize: bool) -> dict[str, int]:
    return minutes_by_key(entries, "activity", quantize)


def is_breakdown_shown(sums: dict[str, int]) -> bool:
    """A breakdown is only worth displaying with more than one distinct key."""
    return len(sums) > 1


def get_block_summary(entries: list[TimeEntry], quantize: bool) -> dict[str, Any]:
    """
    Returns: {
        "total": int,  # minutes
        "projects": dict[str, int],
        "activities": dict[str, int],
    }
    """
    return {
        "total": total_minutes(entries, quantize),
        "projects": minutes_by_project(entries, quantize),
        "activities": minutes_by_activity(entries, quantize),
    }
