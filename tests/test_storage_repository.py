# SPDX-License-Identifier: MIT

import pytest
from yaml import safe_load

from timeblocks import configuration
from timeblocks.repository.storage import (
    STORAGE_REPO,
    PersistenceError,
    StorageRepository,
)
from timeblocks.time import today_local_date_str

from conftest import make_entry


def test_get_or_create_block_initializes_defaults(data_dir):
    block = STORAGE_REPO.get_or_create_block("abc")
    assert block == {
        "tracker_id": "abc",
        "entries": [],
        "sort": "none",
        "reference_date": today_local_date_str(),
    }
    assert STORAGE_REPO.is_dirty
    assert STORAGE_REPO.has_block("abc")


def test_get_or_create_block_returns_existing(data_dir):
    STORAGE_REPO.append_entry("abc", make_entry("09:00", "10:00"))
    STORAGE_REPO.set_sort("abc", "start")
    block = STORAGE_REPO.get_or_create_block("abc")
    assert len(block["entries"]) == 1
    assert block["sort"] == "start"


def test_remove_entry_at_removes_by_position_not_value(data_dir):
    STORAGE_REPO.get_or_create_block("abc")
    STORAGE_REPO.append_entry("abc", make_entry("09:00", "10:00", activity="same"))
    STORAGE_REPO.append_entry("abc", make_entry("11:00", "12:00", activity="other"))
    STORAGE_REPO.append_entry("abc", make_entry("09:00", "10:00", activity="same"))

    removed = STORAGE_REPO.remove_entry_at("abc", 2)

    assert removed["activity"] == "same"
    assert [entry["activity"] for entry in STORAGE_REPO.get_entries("abc")] == [
        "same",
        "other",
    ]


def test_remove_entry_at_out_of_range(data_dir):
    STORAGE_REPO.get_or_create_block("abc")
    with pytest.raises(IndexError):
        STORAGE_REPO.remove_entry_at("abc", 0)


def test_modify_entry_at_changes_only_given_fields(data_dir):
    STORAGE_REPO.append_entry("abc", make_entry("09:00", "10:00", "A", "x"))
    STORAGE_REPO.modify_entry_at("abc", 0, end="11:00", project="B")
    assert STORAGE_REPO.get_entries("abc")[0] == make_entry("09:00", "11:00", "B", "x")
    assert "B" in STORAGE_REPO.get_projects()


def test_returned_entries_are_copies(data_dir):
    STORAGE_REPO.append_entry("abc", make_entry("09:00", "10:00"))
    STORAGE_REPO.get_entries("abc")[0]["start"] = "00:00"
    assert STORAGE_REPO.get_entries("abc")[0]["start"] == "09:00"


def test_set_reference_date_backfills_every_row(data_dir):
    STORAGE_REPO.append_entry("abc", make_entry(date="2024-01-01"))
    STORAGE_REPO.append_entry("abc", make_entry(date="2024-01-02"))
    STORAGE_REPO.append_entry("other", make_entry(date="2024-01-03"))

    STORAGE_REPO.set_reference_date("abc", "2024-03-15")

    assert STORAGE_REPO.get_reference_date("abc") == "2024-03-15"
    assert {entry["date"] for entry in STORAGE_REPO.get_entries("abc")} == {"2024-03-15"}
    assert STORAGE_REPO.get_entries("other")[0]["date"] == "2024-01-03"


def test_reference_date_defaults_to_first_row_date(data_dir):
    configuration.DATA_STORAGE_PATH.write_text(
        '{"instances": {"abc": [{"date": "2023-05-06", "start": "", "end": "",'
        ' "project": "", "activity": ""}]}}'
    )
    assert STORAGE_REPO.get_reference_date("abc") == "2023-05-06"


def test_add_project_is_additive_and_trimmed(data_dir):
    assert STORAGE_REPO.add_project(" Alpha ")
    assert not STORAGE_REPO.add_project("Alpha")
    assert not STORAGE_REPO.add_project("   ")
    STORAGE_REPO.add_project("Beta")
    assert STORAGE_REPO.get_projects() == ["Alpha", "Beta"]


def test_get_all_entries_spans_blocks(data_dir):
    STORAGE_REPO.append_entry("one", make_entry(activity="1"))
    STORAGE_REPO.append_entry("two", make_entry(activity="2"))
    STORAGE_REPO.append_entry("one", make_entry(activity="3"))
    assert [entry["activity"] for entry in STORAGE_REPO.get_all_entries()] == [
        "1",
        "3",
        "2",
    ]


def test_flush_writes_original_key_names(data_dir):
    STORAGE_REPO.append_entry("abc", make_entry("09:00", "10:30", "A", "x"))
    STORAGE_REPO.set_sort("abc", "project")
    STORAGE_REPO.update_settings(round_times_to_quarter_hour=True)

    assert STORAGE_REPO.flush()
    assert not STORAGE_REPO.flush()

    written = safe_load(configuration.DATA_STORAGE_PATH.read_text())
    assert written["instances"]["abc"][0]["start"] == "09:00"
    assert written["instances"]["abc"][0]["end"] == "10:30"
    assert written["sortSettings"] == {"abc": "project"}
    assert written["settings"]["roundTimesToQuarterHour"] is True


def test_round_trip_through_a_fresh_repository(data_dir):
    STORAGE_REPO.append_entry("abc", make_entry("09:00", "10:30", "A", "x"))
    STORAGE_REPO.set_sort("abc", "none")
    STORAGE_REPO.flush()

    reloaded = StorageRepository()
    assert reloaded.get_entries("abc") == [make_entry("09:00", "10:30", "A", "x")]
    assert reloaded.get_sort("abc") == "none"
    assert reloaded.get_settings()["projects"] == ["A"]


def test_load_backfills_missing_fields(data_dir):
    configuration.DATA_STORAGE_PATH.write_text(
        '{"instances": {"abc": [{"start": "09:00", "end": "10:00", "project": "A"}]},'
        ' "settings": {"roundTimesToQuarterHour": true}}'
    )
    entry = STORAGE_REPO.get_entries("abc")[0]
    assert entry["date"] == today_local_date_str()
    assert entry["activity"] == ""
    settings = STORAGE_REPO.get_settings()
    assert settings["roundTimesToQuarterHour"] is True
    assert settings["autoCleanup"] is False
    assert settings["projects"] == []
    assert STORAGE_REPO.get_sort("abc") == "none"


def test_unreadable_storage_raises_persistence_error(data_dir):
    configuration.DATA_STORAGE_PATH.write_text("instances: [unclosed")
    with pytest.raises(PersistenceError):
        STORAGE_REPO.get_tracker_ids()


def test_failed_save_keeps_memory_state(data_dir, monkeypatch):
    STORAGE_REPO.append_entry("abc", make_entry("09:00", "10:00"))
    monkeypatch.setattr(
        configuration, "DATA_STORAGE_PATH", data_dir / "missing-dir" / "storage.yaml"
    )

    with pytest.raises(PersistenceError):
        STORAGE_REPO.flush()

    assert len(STORAGE_REPO.get_entries("abc")) == 1
    assert STORAGE_REPO.is_dirty
