# SPDX-License-Identifier: MIT

import locale
import logging
from typing import Any

from yaml import dump

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader  # noqa: F401
except ImportError:
    from yaml import Dumper  # type: ignore[assignment]

from timeblocks import configuration
from timeblocks.migrate import migrate
from timeblocks.repository.configuration import CONFIGURATION_REPO
from timeblocks.repository.migrate import MIGRATE_REPO
from timeblocks.repository.storage import STORAGE_REPO
from timeblocks.view import state as view_state

logger = logging.getLogger(__name__)


def initialize() -> None:
    __ensure_collation()

    configuration.CONFIG_PATH.mkdir(parents=True, exist_ok=True)
    configuration.load_data_path_configuration()
    configuration.DATA_PATH.mkdir(parents=True, exist_ok=True)

    __ensure_config_files()
    __ensure_data_files()

    config = CONFIGURATION_REPO.get_config()
    view_state.set_show_header(config["show_header"])

    __ensure_migrations()


def __ensure_config_files() -> None:
    if not configuration.APP_CONFIG_PATH.is_file():
        configuration.APP_CONFIG_PATH.touch()
        config = configuration.get_default_configuration()
        configuration.APP_CONFIG_PATH.write_text(dump(config, Dumper=Dumper))


def __ensure_data_files() -> None:
    if not configuration.DATA_MIGRATE_PATH.is_file():
        configuration.DATA_MIGRATE_PATH.touch()
        migrate_data: dict[str, Any] = {"version": 0}
        configuration.DATA_MIGRATE_PATH.write_text(dump(migrate_data, Dumper=Dumper))


def __ensure_collation() -> None:
    try:
        locale.setlocale(locale.LC_COLLATE, "")
    except locale.Error as error:
        logger.debug("keeping C collation: %s", error)


def __ensure_migrations() -> None:
    if migrate.run_required_migrations():
        # seeded data must reach disk before the migration is recorded
        STORAGE_REPO.flush()
        MIGRATE_REPO.flush()
