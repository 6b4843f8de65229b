# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

from timeblocks.model.storage import SortPreference
from timeblocks.model.time_entry import TimeEntry
from timeblocks.model.tracker_id import TrackerId


class Block(TypedDict):
    tracker_id: TrackerId
    entries: list[TimeEntry]
    sort: SortPreference
    reference_date: str


class TrackerBlockSpan(TypedDict):
    line_start: int  # opening fence line
    line_end: int  # closing fence line, inclusive
    tracker_id: Optional[TrackerId]
