# SPDX-License-Identifier: MIT

import locale
from copy import deepcopy

from timeblocks.model.storage import SortPreference
from timeblocks.model.time_entry import TimeEntry
from timeblocks.time import parse_clock_time


def project_sort_key(project: str) -> tuple[str, str]:
    """Collation key comparing case-insensitively first, then by case."""
    project = project or ""
    return locale.strxfrm(project.casefold()), locale.strxfrm(project)


def sort_entry_positions(entries: list[TimeEntry], sort: SortPreference) -> list[int]:
    """
    Storage positions of ``entries`` in display order.

    The sort is stable: rows with equal keys (including unparseable start
    times, which count as 00:00) keep their stored order.
    """
    positions = list(range(len(entries)))
    if sort == "start":
        positions.sort(key=lambda position: parse_clock_time(entries[position]["start"]))
    elif sort == "project":
        positions.sort(key=lambda position: project_sort_key(entries[position]["project"]))
    return positions


def sort_entries(entries: list[TimeEntry], sort: SortPreference) -> list[TimeEntry]:
    return [
        deepcopy(entries[position])
        for position in sort_entry_positions(entries, sort)
    ]
