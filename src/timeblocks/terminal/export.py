# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import Annotated, Optional

import typer

from timeblocks.repository.configuration import CONFIGURATION_REPO
from timeblocks.repository.storage import STORAGE_REPO
from timeblocks.service.export import entries_to_csv, export_filename, filter_entries
from timeblocks.terminal.completion import complete_project
from timeblocks.terminal.notify import notify, notify_error
from timeblocks.terminal.validate import validate_date


def export(
    date_start: Annotated[str, typer.Argument(help="YYYY-MM-DD", callback=validate_date)],
    date_end: Annotated[str, typer.Argument(help="YYYY-MM-DD", callback=validate_date)],
    project: Annotated[
        Optional[str],
        typer.Option(
            "--project",
            "-p",
            help="only rows of this exact project",
            autocompletion=complete_project,
        ),
    ] = None,
    output: Annotated[
        Optional[Path],
        typer.Option(
            "--output",
            "-o",
            help="target directory (default: configured export_path or cwd)",
        ),
    ] = None,
    stdout: Annotated[
        bool, typer.Option("--stdout", help="print instead of writing a file")
    ] = False,
) -> None:
    """Export rows of every tracker within a date range as CSV."""
    entries = filter_entries(
        STORAGE_REPO.get_all_entries(), date_start, date_end, project
    )
    csv_text = entries_to_csv(entries, STORAGE_REPO.is_rounding_enabled())

    if stdout:
        typer.echo(csv_text)
        return

    if output is None:
        export_path = CONFIGURATION_REPO.get_config().get("export_path")
        output = Path(export_path) if export_path else Path.cwd()

    target = output / export_filename(date_start, date_end)
    try:
        target.write_text(csv_text, encoding="utf-8")
    except OSError as error:
        notify_error(f"Export failed: {error}")
        raise typer.Exit(1)

    notify(f"Exported {len(entries)} rows to {target}")
