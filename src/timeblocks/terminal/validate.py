# SPDX-License-Identifier: MIT

import re
from typing import Optional, cast

import typer

from timeblocks.model.storage import SORT_PREFERENCES, SortPreference
from timeblocks.time import is_date_str

CLOCK_TIME_PATTERN = re.compile(r"^([01]?\d|2[0-3]):([0-5]\d)$")


def validate_clock_time(clock_time: Optional[str]) -> Optional[str]:
    """Accepts HH:MM (24h) or an empty string, which clears the value."""
    if clock_time is None or clock_time == "":
        return clock_time
    if not CLOCK_TIME_PATTERN.match(clock_time):
        raise typer.BadParameter("Incorrect time format, expected HH:MM")
    return clock_time


def validate_date(date: Optional[str]) -> Optional[str]:
    if date is None:
        return None
    if not is_date_str(date):
        raise typer.BadParameter("Incorrect date format, expected YYYY-MM-DD")
    return date


def validate_sort_preference(sort: str) -> SortPreference:
    if sort not in SORT_PREFERENCES:
        raise typer.BadParameter(
            f"Invalid sort: {sort}. Valid options: {', '.join(SORT_PREFERENCES)}"
        )
    return cast(SortPreference, sort)
