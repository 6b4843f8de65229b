# SPDX-License-Identifier: MIT

import typer
from rich.console import Console
from rich.markup import escape

from timeblocks.repository.storage import STORAGE_REPO, PersistenceError


def notify(message: str) -> None:
    Console().print(f"[cyan]{escape(message)}[/cyan]")


def notify_error(message: str) -> None:
    Console(stderr=True).print(f"[bold red]{escape(message)}[/bold red]")


def persist_changes() -> None:
    """
    Write the storage blob after a mutating command.

    A failed write is reported and the command exits non-zero. The change
    stays in memory for this process; nothing is rolled back.
    """
    try:
        STORAGE_REPO.flush()
    except PersistenceError as error:
        notify_error(f"Saving tracker data failed: {error}")
        raise typer.Exit(1)
