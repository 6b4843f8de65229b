# SPDX-License-Identifier: MIT

from typing import TypedDict


class TimeEntry(TypedDict):
    date: str  # YYYY-MM-DD
    start: str  # HH:MM or ""
    end: str  # HH:MM or ""
    project: str
    activity: str
