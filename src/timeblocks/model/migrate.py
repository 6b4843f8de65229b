# SPDX-License-Identifier: MIT

from typing import TypedDict


class Migrate(TypedDict):
    version: int
