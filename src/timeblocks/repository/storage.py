# SPDX-License-Identifier: MIT

import logging
from copy import deepcopy
from typing import Any, Optional, cast

from yaml import YAMLError, dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from timeblocks import configuration
from timeblocks.model.block import Block
from timeblocks.model.storage import GlobalSettings, PluginStorage, SortPreference
from timeblocks.model.time_entry import TimeEntry
from timeblocks.model.tracker_id import TrackerId
from timeblocks.template.storage import get_settings_template, get_storage_template
from timeblocks.time import today_local_date_str

logger = logging.getLogger(__name__)

ENTRY_FIELDS = ("date", "start", "end", "project", "activity")


class PersistenceError(Exception):
    """Raised when the storage blob cannot be read or written."""

    pass


class StorageRepository:
    """
    In-memory owner of every tracker block plus the global settings.

    The whole blob is loaded on first access and written back in full by
    :meth:`flush`. A failed write leaves the in-memory state as it is.
    """

    def __init__(self) -> None:
        self._storage: Optional[PluginStorage] = None
        self.is_dirty = False

    @property
    def storage(self) -> PluginStorage:
        if self._storage is None:
            self.__load_data()
        if self._storage is None:
            raise ValueError()
        return self._storage

    def __load_data(self) -> None:
        path = configuration.DATA_STORAGE_PATH
        raw_storage: Any = None
        if path.is_file():
            try:
                raw_storage = load(path.read_text(), Loader=Loader)
            except (OSError, YAMLError) as error:
                raise PersistenceError(f"could not read {path}: {error}") from error
        self._storage = self.__convert_storage_for_deserialization(raw_storage)
        logger.debug(
            "loaded %d tracker blocks from %s", len(self._storage["instances"]), path
        )

    def __save_data(self, storage: PluginStorage) -> None:
        path = configuration.DATA_STORAGE_PATH
        try:
            path.write_text(dump(storage, Dumper=Dumper, sort_keys=False))
        except OSError as error:
            raise PersistenceError(f"could not write {path}: {error}") from error
        logger.debug("saved storage to %s", path)

    def flush(self) -> bool:
        if self._storage is not None and self.is_dirty:
            self.__save_data(self._storage)
            self.is_dirty = False
            return True
        return False

    def __convert_storage_for_deserialization(self, raw_storage: Any) -> PluginStorage:
        storage = get_storage_template()
        if not isinstance(raw_storage, dict):
            return storage

        storage["instances"] = {
            str(tracker_id): entries or []
            for tracker_id, entries in (raw_storage.get("instances") or {}).items()
        }
        storage["sortSettings"] = {
            str(tracker_id): sort
            for tracker_id, sort in (raw_storage.get("sortSettings") or {}).items()
        }
        storage["trackerDates"] = {
            str(tracker_id): str(date)
            for tracker_id, date in (raw_storage.get("trackerDates") or {}).items()
            if date
        }

        settings = get_settings_template()
        settings.update(raw_storage.get("settings") or {})
        if settings["projects"] is None:
            settings["projects"] = []
        storage["settings"] = settings

        today = today_local_date_str()
        for entries in storage["instances"].values():
            for entry in entries:
                for field in ENTRY_FIELDS:
                    value = entry.get(field)
                    entry[field] = "" if value is None else str(value)  # type: ignore[literal-required]
                if not entry["date"]:
                    entry["date"] = today

        return cast(PluginStorage, storage)

    # ─────────────────────────────────────────────────────────────
    # Blocks
    # ─────────────────────────────────────────────────────────────

    def __ensure_block(self, tracker_id: TrackerId) -> list[TimeEntry]:
        storage = self.storage
        if tracker_id not in storage["instances"]:
            self.is_dirty = True
            storage["instances"][tracker_id] = []
        if tracker_id not in storage["sortSettings"]:
            self.is_dirty = True
            storage["sortSettings"][tracker_id] = None
        if not storage["trackerDates"].get(tracker_id):
            self.is_dirty = True
            entries = storage["instances"][tracker_id]
            first_date = entries[0]["date"] if entries else ""
            storage["trackerDates"][tracker_id] = first_date or today_local_date_str()
        return storage["instances"][tracker_id]

    def get_or_create_block(self, tracker_id: TrackerId) -> Block:
        entries = self.__ensure_block(tracker_id)
        return {
            "tracker_id": tracker_id,
            "entries": deepcopy(entries),
            "sort": self.get_sort(tracker_id),
            "reference_date": self.storage["trackerDates"][tracker_id],
        }

    def has_block(self, tracker_id: TrackerId) -> bool:
        return tracker_id in self.storage["instances"]

    def get_tracker_ids(self) -> list[TrackerId]:
        return list(self.storage["instances"].keys())

    def get_entries(self, tracker_id: TrackerId) -> list[TimeEntry]:
        return deepcopy(self.storage["instances"].get(tracker_id, []))

    def get_all_entries(self) -> list[TimeEntry]:
        all_entries: list[TimeEntry] = []
        for entries in self.storage["instances"].values():
            all_entries.extend(deepcopy(entries))
        return all_entries

    # ─────────────────────────────────────────────────────────────
    # Entries (addressed by position, never by value)
    # ─────────────────────────────────────────────────────────────

    def append_entry(self, tracker_id: TrackerId, entry: TimeEntry) -> int:
        entries = self.__ensure_block(tracker_id)
        self.is_dirty = True
        entries.append(deepcopy(entry))
        if entry["project"].strip():
            self.add_project(entry["project"])
        return len(entries) - 1

    def __entry_at(self, tracker_id: TrackerId, position: int) -> TimeEntry:
        entries = self.storage["instances"].get(tracker_id, [])
        if not 0 <= position < len(entries):
            raise IndexError(
                f"{StorageRepository.__name__}: no entry at position {position} in tracker {tracker_id}"
            )
        return entries[position]

    def remove_entry_at(self, tracker_id: TrackerId, position: int) -> TimeEntry:
        entry = self.__entry_at(tracker_id, position)
        self.is_dirty = True
        del self.storage["instances"][tracker_id][position]
        return deepcopy(entry)

    def modify_entry_at(
        self,
        tracker_id: TrackerId,
        position: int,
        date: Optional[str] = None,
        start: Optional[str] = None,
        end: Optional[str] = None,
        project: Optional[str] = None,
        activity: Optional[str] = None,
    ) -> None:
        entry = self.__entry_at(tracker_id, position)
        self.is_dirty = True
        if date is not None:
            entry["date"] = date
        if start is not None:
            entry["start"] = start
        if end is not None:
            entry["end"] = end
        if project is not None:
            entry["project"] = project
            if project.strip():
                self.add_project(project)
        if activity is not None:
            entry["activity"] = activity

    # ─────────────────────────────────────────────────────────────
    # Per-block preferences
    # ─────────────────────────────────────────────────────────────

    def get_sort(self, tracker_id: TrackerId) -> SortPreference:
        sort = self.storage["sortSettings"].get(tracker_id)
        if sort in ("start", "project"):
            return cast(SortPreference, sort)
        return "none"

    def set_sort(self, tracker_id: TrackerId, sort: SortPreference) -> None:
        self.__ensure_block(tracker_id)
        self.is_dirty = True
        self.storage["sortSettings"][tracker_id] = None if sort == "none" else sort

    def get_reference_date(self, tracker_id: TrackerId) -> str:
        self.__ensure_block(tracker_id)
        return self.storage["trackerDates"][tracker_id]

    def set_reference_date(self, tracker_id: TrackerId, date: str) -> None:
        """Change the block's reference date and overwrite every row's date with it."""
        entries = self.__ensure_block(tracker_id)
        self.is_dirty = True
        self.storage["trackerDates"][tracker_id] = date
        for entry in entries:
            entry["date"] = date

    # ─────────────────────────────────────────────────────────────
    # Global settings
    # ─────────────────────────────────────────────────────────────

    def get_settings(self) -> GlobalSettings:
        return deepcopy(self.storage["settings"])

    def is_rounding_enabled(self) -> bool:
        return bool(self.storage["settings"]["roundTimesToQuarterHour"])

    def update_settings(
        self,
        auto_cleanup: Optional[bool] = None,
        round_times_to_quarter_hour: Optional[bool] = None,
        migrated_projects: Optional[bool] = None,
    ) -> None:
        self.is_dirty = True
        settings = self.storage["settings"]
        if auto_cleanup is not None:
            settings["autoCleanup"] = auto_cleanup
        if round_times_to_quarter_hour is not None:
            settings["roundTimesToQuarterHour"] = round_times_to_quarter_hour
        if migrated_projects is not None:
            settings["migratedProjects"] = migrated_projects

    def get_projects(self) -> list[str]:
        return list(self.storage["settings"]["projects"])

    def add_project(self, project: str) -> bool:
        project = project.strip()
        projects = self.storage["settings"]["projects"]
        if not project or project in projects:
            return False
        self.is_dirty = True
        projects.append(project)
        return True

    def add_projects(self, projects: list[str]) -> int:
        return sum(1 for project in projects if self.add_project(project))


STORAGE_REPO = StorageRepository()
