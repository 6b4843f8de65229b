# SPDX-License-Identifier: MIT

import re
from typing import Optional

import pendulum

MINUTES_PER_HOUR = 60
DATE_FORMAT = "YYYY-MM-DD"
DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}")


def parse_clock_time(clock_time: Optional[str]) -> int:
    """Parse an ``HH:MM`` string to minutes since midnight.

    Empty values, values without a ``:`` separator and values whose hour or
    minute part is not an integer all parse to 0.
    """
    if not clock_time or ":" not in clock_time:
        return 0
    parts = clock_time.split(":")
    try:
        hours = int(parts[0].strip())
        minutes = int(parts[1].strip())
    except ValueError:
        return 0
    return hours * MINUTES_PER_HOUR + minutes


def format_duration(total_minutes: int) -> str:
    """Format minutes as ``H:MM``; hours are unpadded and unbounded."""
    hours, minutes = divmod(total_minutes, MINUTES_PER_HOUR)
    return f"{hours}:{minutes:02d}"


def today_local_date_str() -> str:
    return pendulum.today("local").format(DATE_FORMAT)


def date_from_str(date_str: str) -> pendulum.Date:
    """Parse a ``YYYY-MM-DD`` string to a plain calendar date (no timezone).

    Other ISO 8601 spellings (``20240229``, ordinal or week dates, datetimes)
    raise ValueError.
    """
    if not DATE_PATTERN.fullmatch(date_str):
        raise ValueError(f"not a YYYY-MM-DD date: {date_str}")
    return pendulum.from_format(date_str, DATE_FORMAT).date()


def date_from_str_optional(date_str: Optional[str]) -> Optional[pendulum.Date]:
    """Like :func:`date_from_str` but returns None for empty or malformed input."""
    if not date_str:
        return None
    try:
        return date_from_str(date_str)
    except ValueError:
        return None


def is_date_str(date_str: Optional[str]) -> bool:
    return date_from_str_optional(date_str) is not None


def is_date_in_range(date_str: Optional[str], start_str: str, end_str: str) -> bool:
    """Inclusive calendar-date range check.

    An entry date, start or end that does not parse is never in range.
    """
    date = date_from_str_optional(date_str)
    start = date_from_str_optional(start_str)
    end = date_from_str_optional(end_str)
    if date is None or start is None or end is None:
        return False
    return start <= date <= end
