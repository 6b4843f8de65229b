# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

from timeblocks import configuration
from timeblocks.repository.configuration import CONFIGURATION_REPO
from timeblocks.repository.storage import STORAGE_REPO
from timeblocks.terminal.custom_typer import AliasedTyperGroup
from timeblocks.terminal.notify import notify, persist_changes

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


def _enabled(value: bool) -> str:
    return "✓ Enabled" if value else "✗ Disabled"


@app.command("view, v")
def view() -> None:
    """Display current configuration settings."""
    config = CONFIGURATION_REPO.get_config()
    settings = STORAGE_REPO.get_settings()

    console = Console()
    table = Table()
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="magenta")

    table.add_row("data_path", str(configuration.DATA_PATH))
    table.add_row("show_header", _enabled(config["show_header"]))
    table.add_row("block_label", config["block_label"])
    table.add_row("export_path", config.get("export_path") or "None")
    table.add_row("round_times", _enabled(settings["roundTimesToQuarterHour"]))
    table.add_row("auto_cleanup", _enabled(settings["autoCleanup"]))
    table.add_row("projects", str(len(settings["projects"])))

    console.print(table)

    yaml_library_type = "untested"
    try:
        from yaml import CDumper as Dumper  # noqa: F401
        from yaml import CLoader as Loader  # noqa: F401

        yaml_library_type = "C"
    except ImportError:
        from yaml import Loader  # type: ignore[assignment] # noqa: F401

        yaml_library_type = "Python"

    console.print()
    console.print(f"YAML Library Type: {yaml_library_type}")


@app.command("set, s")
def set(
    round_times: Annotated[
        Optional[bool],
        typer.Option(
            "--round/--no-round",
            help="Round every duration to 15 minute steps",
        ),
    ] = None,
    auto_cleanup: Annotated[
        Optional[bool],
        typer.Option(
            "--auto-cleanup/--no-auto-cleanup",
            help="Enable/disable automatic cleanup of orphaned tracker data",
        ),
    ] = None,
    show_header: Annotated[
        Optional[bool],
        typer.Option("--show-header/--no-show-header"),
    ] = None,
    block_label: Annotated[
        Optional[str],
        typer.Option("--block-label", help="Code block label of tracker blocks"),
    ] = None,
    data_path: Annotated[
        Optional[str],
        typer.Option("--data-path", help="Directory path for storing data files"),
    ] = None,
    remove_data_path: Annotated[
        bool,
        typer.Option("--remove-data-path", help="Reset data path to the default"),
    ] = False,
    export_path: Annotated[
        Optional[str],
        typer.Option("--export-path", help="Default directory for CSV exports"),
    ] = None,
    remove_export_path: Annotated[
        bool,
        typer.Option("--remove-export-path", help="Export to the current directory"),
    ] = False,
) -> None:
    """Change configuration and global tracker settings."""
    if block_label is not None and (not block_label or any(c.isspace() for c in block_label)):
        raise typer.BadParameter("Block label must be a single word")

    if round_times is not None or auto_cleanup is not None:
        STORAGE_REPO.update_settings(
            auto_cleanup=auto_cleanup,
            round_times_to_quarter_hour=round_times,
        )
        persist_changes()
        if round_times is not None:
            notify(
                "Rounding to 15 minutes is now "
                + ("enabled" if round_times else "disabled")
            )
        if auto_cleanup is not None:
            notify("Auto cleanup " + ("enabled" if auto_cleanup else "disabled"))

    CONFIGURATION_REPO.update_config(
        data_path=data_path,
        show_header=show_header,
        block_label=block_label,
        export_path=export_path,
        remove_data_path=remove_data_path,
        remove_export_path=remove_export_path,
    )
    CONFIGURATION_REPO.flush()
