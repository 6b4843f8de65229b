# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import NotRequired, Optional, TypedDict

from yaml import load

try:
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Loader  # type: ignore[assignment]
import platformdirs

APP_NAME = "timeblocks"

DEFAULT_BLOCK_LABEL = "time-tracker"

CONFIG_PATH = platformdirs.user_config_path(APP_NAME)
APP_CONFIG_PATH = CONFIG_PATH / "config.yaml"

# These will be set dynamically by load_data_path_configuration()
DATA_PATH: Path = platformdirs.user_data_path(APP_NAME)
DATA_MIGRATE_PATH: Path = DATA_PATH / "migrate.yaml"
DATA_STORAGE_PATH: Path = DATA_PATH / "storage.yaml"


class Configuration(TypedDict):
    data_path: Optional[str]
    show_header: bool
    block_label: str
    export_path: NotRequired[Optional[str]]


def get_default_configuration() -> Configuration:
    return {
        "data_path": None,
        "show_header": True,
        "block_label": DEFAULT_BLOCK_LABEL,
        "export_path": None,
    }


def load_data_path_configuration() -> None:
    """
    Load the configuration and set the DATA_PATH variables dynamically.

    This must be called after the config file exists and before any
    repositories are instantiated.
    """
    global DATA_PATH, DATA_MIGRATE_PATH, DATA_STORAGE_PATH

    if not APP_CONFIG_PATH.is_file():
        # Config doesn't exist yet, use defaults
        return

    config: Optional[Configuration] = load(APP_CONFIG_PATH.read_text(), Loader=Loader)
    if config is None:
        return
    data_path_setting = config.get("data_path")

    if data_path_setting is not None:
        DATA_PATH = Path(data_path_setting)
        DATA_MIGRATE_PATH = DATA_PATH / "migrate.yaml"
        DATA_STORAGE_PATH = DATA_PATH / "storage.yaml"
