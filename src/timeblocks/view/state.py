# SPDX-License-Identifier: MIT

from contextvars import ContextVar

# set from config at startup, overridden by --no-header
_show_header_var: ContextVar[bool] = ContextVar("show_header", default=True)


def set_show_header(value: bool) -> None:
    _show_header_var.set(value)


def get_show_header() -> bool:
    """Whether report views print the document/tracker header panel."""
    return _show_header_var.get()
