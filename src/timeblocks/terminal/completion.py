# SPDX-License-Identifier: MIT

from timeblocks.repository.storage import STORAGE_REPO


def complete_project(incomplete: str) -> list[str]:
    """Return list of catalog projects for shell completion."""

    all_projects = STORAGE_REPO.get_projects()
    return [project for project in all_projects if project.startswith(incomplete)]


def complete_tracker_id(incomplete: str) -> list[str]:
    """Return list of known tracker ids for shell completion."""

    return [
        tracker_id
        for tracker_id in STORAGE_REPO.get_tracker_ids()
        if tracker_id.startswith(incomplete)
    ]
