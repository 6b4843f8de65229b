# SPDX-License-Identifier: MIT

from copy import deepcopy
from typing import Optional

from yaml import dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader  # noqa: F401
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from timeblocks import configuration


class ConfigurationRepository:
    def __init__(self) -> None:
        self._config: Optional[configuration.Configuration] = None
        self.is_dirty = False

    @property
    def config(self) -> configuration.Configuration:
        if self._config is None:
            self.__load_data()
        if self._config is None:
            raise ValueError()
        return self._config

    def __load_data(self) -> None:
        self._config = load(configuration.APP_CONFIG_PATH.read_text(), Loader=Loader)

        if self._config is None:
            raise ValueError()

        # Migration: back-fill any setting added after the config file was written
        for key, value in configuration.get_default_configuration().items():
            if key not in self._config:
                self._config[key] = value  # type: ignore[literal-required]

    def __save_data(self, config: configuration.Configuration) -> None:
        configuration.APP_CONFIG_PATH.write_text(dump(config, Dumper=Dumper))

    def flush(self) -> None:
        if self._config is not None and self.is_dirty:
            self.__save_data(self._config)
            self.is_dirty = False

    def get_config(self) -> configuration.Configuration:
        return deepcopy(self.config)

    def update_config(
        self,
        data_path: Optional[str] = None,
        show_header: Optional[bool] = None,
        block_label: Optional[str] = None,
        export_path: Optional[str] = None,
        remove_data_path: bool = False,
        remove_export_path: bool = False,
    ) -> None:
        self.is_dirty = True
        if data_path is not None:
            self.config["data_path"] = data_path
        if show_header is not None:
            self.config["show_header"] = show_header
        if block_label is not None:
            self.config["block_label"] = block_label
        if export_path is not None:
            self.config["export_path"] = export_path

        if remove_data_path:
            self.config["data_path"] = None
        if remove_export_path:
            self.config["export_path"] = None


CONFIGURATION_REPO = ConfigurationRepository()
