# SPDX-License-Identifier: MIT

from typing import Optional

from rich import print
from rich.padding import Padding

from timeblocks.view.state import get_show_header


def header(source: str, sub_header: Optional[str] = None) -> None:
    """Print the application header.

    Args:
        source: The document or data set being reported on
        sub_header: Optional sub-header text to display
    """
    if not get_show_header():
        return

    additional = ""
    if sub_header is not None:
        additional = f"[sandy_brown]{sub_header}[/sandy_brown]"
    source = f"[plum1]{source}[/plum1]"

    print(Padding("[dark_orange]timeblocks[/dark_orange]", (1, 0, 0, 1)))
    print(Padding(additional, (0, 1)))
    print(Padding(source, (0, 1)))
