# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import Iterator

import pytest

from timeblocks import configuration
from timeblocks.model.time_entry import TimeEntry
from timeblocks.repository.configuration import CONFIGURATION_REPO
from timeblocks.repository.document import DOCUMENT_REPO
from timeblocks.repository.migrate import MIGRATE_REPO
from timeblocks.repository.storage import STORAGE_REPO
from timeblocks.view import state as view_state


def _reset_repositories() -> None:
    STORAGE_REPO._storage = None
    STORAGE_REPO.is_dirty = False
    MIGRATE_REPO._migrate_data = None
    MIGRATE_REPO.is_dirty = False
    CONFIGURATION_REPO._config = None
    CONFIGURATION_REPO.is_dirty = False
    DOCUMENT_REPO._processed_paths.clear()


@pytest.fixture
def data_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Path]:
    """Point every configuration path at a temporary directory."""
    config_path = tmp_path / "config"
    data_path = tmp_path / "data"
    config_path.mkdir()
    data_path.mkdir()

    monkeypatch.setattr(configuration, "CONFIG_PATH", config_path)
    monkeypatch.setattr(configuration, "APP_CONFIG_PATH", config_path / "config.yaml")
    monkeypatch.setattr(configuration, "DATA_PATH", data_path)
    monkeypatch.setattr(configuration, "DATA_MIGRATE_PATH", data_path / "migrate.yaml")
    monkeypatch.setattr(configuration, "DATA_STORAGE_PATH", data_path / "storage.yaml")

    _reset_repositories()
    view_state.set_show_header(True)
    yield data_path
    _reset_repositories()


def make_entry(
    start: str = "",
    end: str = "",
    project: str = "",
    activity: str = "",
    date: str = "2024-01-01",
) -> TimeEntry:
    return {
        "date": date,
        "start": start,
        "end": end,
        "project": project,
        "activity": activity,
    }
