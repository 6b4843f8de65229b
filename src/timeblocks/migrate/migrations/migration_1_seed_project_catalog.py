# SPDX-License-Identifier: MIT

import logging

from timeblocks.migrate.registry import migration
from timeblocks.repository.storage import STORAGE_REPO

logger = logging.getLogger(__name__)


@migration(1)
def migrate() -> None:
    """
    Seed the project catalog from every project name already used by an entry.

    Storage migrated by an earlier release carries ``migratedProjects`` and is
    left alone.
    """
    if STORAGE_REPO.get_settings().get("migratedProjects"):
        logger.info("migration 1: project catalog already seeded, skipping")
        return

    used_projects = [entry["project"] for entry in STORAGE_REPO.get_all_entries()]
    added = STORAGE_REPO.add_projects(used_projects)
    STORAGE_REPO.update_settings(migrated_projects=True)

    logger.info("migration 1: added %d projects to the catalog", added)
