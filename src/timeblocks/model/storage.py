# SPDX-License-Identifier: MIT

from typing import Literal, NotRequired, Optional, TypedDict

from timeblocks.model.time_entry import TimeEntry
from timeblocks.model.tracker_id import TrackerId

SortPreference = Literal["none", "start", "project"]

SORT_PREFERENCES: list[SortPreference] = ["none", "start", "project"]


class GlobalSettings(TypedDict):
    autoCleanup: bool
    roundTimesToQuarterHour: bool
    projects: list[str]
    migratedProjects: NotRequired[bool]


class PluginStorage(TypedDict):
    # Key names are shared with the Obsidian plugin's data.json
    instances: dict[TrackerId, list[TimeEntry]]
    sortSettings: dict[TrackerId, Optional[str]]  # None means "none"
    trackerDates: dict[TrackerId, str]
    settings: GlobalSettings
