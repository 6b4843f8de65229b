# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import Annotated, Optional, cast

import typer

from timeblocks.model.storage import SortPreference
from timeblocks.model.tracker_id import TrackerId
from timeblocks.repository.configuration import CONFIGURATION_REPO
from timeblocks.repository.document import DOCUMENT_REPO, DocumentError
from timeblocks.repository.storage import STORAGE_REPO
from timeblocks.service.identity import find_tracker_blocks, resolve_tracker_id
from timeblocks.template.block import get_block_template
from timeblocks.template.time_entry import get_time_entry_template
from timeblocks.terminal.completion import complete_project, complete_tracker_id
from timeblocks.terminal.custom_typer import AliasedTyperGroup
from timeblocks.terminal.notify import notify, notify_error, persist_changes
from timeblocks.terminal.validate import (
    validate_clock_time,
    validate_date,
    validate_sort_preference,
)
from timeblocks.view.view.views import block as block_report
from timeblocks.view.view.views import tracker as tracker_report
from timeblocks.view.view.views.header import header

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


def _require_block(tracker_id: TrackerId) -> None:
    if not STORAGE_REPO.has_block(tracker_id):
        typer.echo(f"Unknown tracker id: {tracker_id}")
        raise typer.Exit(1)


def _require_position(tracker_id: TrackerId, position: int) -> None:
    row_count = len(STORAGE_REPO.get_entries(tracker_id))
    if not 0 <= position < row_count:
        typer.echo(
            f"No row {position} in tracker {tracker_id} (rows: 0..{row_count - 1})"
        )
        raise typer.Exit(1)


def _show_single_block(tracker_id: TrackerId) -> None:
    block = STORAGE_REPO.get_or_create_block(tracker_id)
    block_report.block_view(block, STORAGE_REPO.is_rounding_enabled())


@app.command("show, s", no_args_is_help=True)
def show(
    document: Annotated[Path, typer.Argument(help="Markdown file with tracker blocks")],
) -> None:
    """Stamp missing tracker ids into a document and display its tracker blocks."""
    block_label = CONFIGURATION_REPO.get_config()["block_label"]

    try:
        if DOCUMENT_REPO.ensure_ids_in_file(document, block_label):
            notify(f"Added tracker ids to {document}")
    except DocumentError as error:
        # unstamped blocks fall back to generated ids below
        notify_error(f"Inserting tracker ids failed: {error}")

    try:
        document_text = DOCUMENT_REPO.read_document(document)
    except DocumentError as error:
        notify_error(str(error))
        raise typer.Exit(1)

    spans = find_tracker_blocks(document_text, block_label)
    header(str(document), f"{len(spans)} tracker blocks")

    for span in spans:
        tracker_id = resolve_tracker_id(
            document_text, span["line_start"], span["line_end"]
        )
        if span["tracker_id"] is None:
            # id is not in the document, so nothing is stored under it
            block_report.block_view(
                get_block_template(tracker_id), STORAGE_REPO.is_rounding_enabled()
            )
        else:
            _show_single_block(tracker_id)

    persist_changes()


@app.command("list, ls")
def list_trackers() -> None:
    """List every tracker block in storage."""
    blocks = [
        STORAGE_REPO.get_or_create_block(tracker_id)
        for tracker_id in STORAGE_REPO.get_tracker_ids()
    ]
    tracker_report.trackers_view(blocks, STORAGE_REPO.is_rounding_enabled())
    persist_changes()


@app.command("add, a", no_args_is_help=True)
def add(
    tracker_id: Annotated[str, typer.Argument(autocompletion=complete_tracker_id)],
    start: Annotated[
        str,
        typer.Option("--start", "-s", help="HH:MM", callback=validate_clock_time),
    ] = "",
    end: Annotated[
        str,
        typer.Option("--end", "-e", help="HH:MM", callback=validate_clock_time),
    ] = "",
    project: Annotated[
        str,
        typer.Option("--project", "-p", autocompletion=complete_project),
    ] = "",
    activity: Annotated[str, typer.Option("--activity", "-a")] = "",
) -> None:
    """Append a row dated with the block's reference date."""
    _require_block(tracker_id)

    entry = get_time_entry_template(STORAGE_REPO.get_reference_date(tracker_id))
    entry["start"] = start
    entry["end"] = end
    entry["project"] = project
    entry["activity"] = activity

    position = STORAGE_REPO.append_entry(tracker_id, entry)
    persist_changes()

    notify(f"Added row {position}")
    _show_single_block(tracker_id)


@app.command("modify, m", no_args_is_help=True)
def modify(
    tracker_id: Annotated[str, typer.Argument(autocompletion=complete_tracker_id)],
    position: Annotated[int, typer.Argument(help="row number shown in the # column")],
    date: Annotated[
        Optional[str],
        typer.Option("--date", "-d", help="YYYY-MM-DD", callback=validate_date),
    ] = None,
    start: Annotated[
        Optional[str],
        typer.Option("--start", "-s", help="HH:MM", callback=validate_clock_time),
    ] = None,
    end: Annotated[
        Optional[str],
        typer.Option("--end", "-e", help="HH:MM", callback=validate_clock_time),
    ] = None,
    project: Annotated[
        Optional[str],
        typer.Option("--project", "-p", autocompletion=complete_project),
    ] = None,
    activity: Annotated[Optional[str], typer.Option("--activity", "-a")] = None,
) -> None:
    """Change fields of one row."""
    _require_block(tracker_id)
    _require_position(tracker_id, position)

    STORAGE_REPO.modify_entry_at(
        tracker_id,
        position,
        date=date,
        start=start,
        end=end,
        project=project,
        activity=activity,
    )
    persist_changes()

    _show_single_block(tracker_id)


@app.command("remove, rm", no_args_is_help=True)
def remove(
    tracker_id: Annotated[str, typer.Argument(autocompletion=complete_tracker_id)],
    position: Annotated[int, typer.Argument(help="row number shown in the # column")],
) -> None:
    """Remove one row."""
    _require_block(tracker_id)
    _require_position(tracker_id, position)

    STORAGE_REPO.remove_entry_at(tracker_id, position)
    persist_changes()

    notify(f"Removed row {position}")
    _show_single_block(tracker_id)


@app.command("sort, so", no_args_is_help=True)
def sort(
    tracker_id: Annotated[str, typer.Argument(autocompletion=complete_tracker_id)],
    preference: Annotated[
        str,
        typer.Argument(help="none, start, project", callback=validate_sort_preference),
    ],
) -> None:
    """Set how a block's rows are ordered for display."""
    _require_block(tracker_id)

    STORAGE_REPO.set_sort(tracker_id, cast(SortPreference, preference))
    persist_changes()

    _show_single_block(tracker_id)


@app.command("date, d", no_args_is_help=True)
def date(
    tracker_id: Annotated[str, typer.Argument(autocompletion=complete_tracker_id)],
    reference_date: Annotated[
        str, typer.Argument(help="YYYY-MM-DD", callback=validate_date)
    ],
) -> None:
    """Set a block's date; every existing row is re-dated as well."""
    _require_block(tracker_id)

    STORAGE_REPO.set_reference_date(tracker_id, reference_date)
    persist_changes()

    _show_single_block(tracker_id)
