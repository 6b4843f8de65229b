# SPDX-License-Identifier: MIT

import atexit
import logging

from timeblocks.repository.configuration import CONFIGURATION_REPO
from timeblocks.repository.migrate import MIGRATE_REPO
from timeblocks.repository.storage import STORAGE_REPO, PersistenceError

logger = logging.getLogger(__name__)


def flush_and_sync() -> None:
    CONFIGURATION_REPO.flush()

    # migrations are recorded only once the data they produced is saved
    try:
        STORAGE_REPO.flush()
    except PersistenceError as error:
        logger.error("unsaved tracker changes: %s", error)
        return

    MIGRATE_REPO.flush()


def register_cleanup() -> None:
    atexit.register(flush_and_sync)
