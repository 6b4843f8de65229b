# SPDX-License-Identifier: MIT

import logging
import time
from pathlib import Path
from typing import Annotated, Optional

import typer

from timeblocks.repository.configuration import CONFIGURATION_REPO
from timeblocks.repository.document import DOCUMENT_REPO, DocumentError
from timeblocks.terminal.notify import notify, notify_error

logger = logging.getLogger(__name__)


def _modified_time(path: Path) -> Optional[float]:
    try:
        return path.stat().st_mtime
    except OSError:
        return None


def watch(
    document: Annotated[Path, typer.Argument(help="Markdown file to keep stamped")],
    interval: Annotated[
        float, typer.Option("--interval", "-i", help="seconds between checks")
    ] = 1.0,
) -> None:
    """Stamp tracker ids into a document whenever it changes (Ctrl+C to stop)."""
    block_label = CONFIGURATION_REPO.get_config()["block_label"]
    last_modified: Optional[float] = None

    try:
        while True:
            modified = _modified_time(document)
            if modified is not None and modified != last_modified:
                DOCUMENT_REPO.notify_changed(document)
                try:
                    if DOCUMENT_REPO.ensure_ids_in_file(document, block_label):
                        notify(f"Added tracker ids to {document}")
                except DocumentError as error:
                    notify_error(str(error))
                # our own rewrite must not count as an outside change
                last_modified = _modified_time(document)
                logger.debug("checked %s at %s", document, last_modified)
            time.sleep(interval)
    except KeyboardInterrupt:
        return
