# SPDX-License-Identifier: MIT

from timeblocks.model.time_entry import TimeEntry
from timeblocks.time import format_duration, parse_clock_time

QUARTER_HOUR = 15
MINUTES_PER_DAY = 24 * 60


def quantize_minutes(minutes: int) -> int:
    """Round to the nearest quarter hour, halves rounding up."""
    return ((minutes + QUARTER_HOUR // 2) // QUARTER_HOUR) * QUARTER_HOUR


def elapsed_minutes(start: str, end: str, quantize: bool = False) -> int:
    """
    Minutes between two ``HH:MM`` clock times.

    An end before the start is read as the next day. Unparseable values count
    as midnight, so the result is never negative.
    """
    start_minutes = parse_clock_time(start)
    end_minutes = parse_clock_time(end)
    if end_minutes < start_minutes:
        end_minutes += MINUTES_PER_DAY

    minutes = max(end_minutes - start_minutes, 0)
    if quantize:
        minutes = quantize_minutes(minutes)
    return minutes


def entry_minutes(entry: TimeEntry, quantize: bool = False) -> int:
    return elapsed_minutes(entry["start"], entry["end"], quantize)


def elapsed_str(start: str, end: str, quantize: bool = False) -> str:
    return format_duration(elapsed_minutes(start, end, quantize))
