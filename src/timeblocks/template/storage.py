# SPDX-License-Identifier: MIT

from timeblocks.model.storage import GlobalSettings, PluginStorage


def get_settings_template() -> GlobalSettings:
    return {
        "autoCleanup": False,
        "roundTimesToQuarterHour": False,
        "projects": [],
        "migratedProjects": False,
    }


def get_storage_template() -> PluginStorage:
    return {
        "instances": {},
        "sortSettings": {},
        "trackerDates": {},
        "settings": get_settings_template(),
    }
