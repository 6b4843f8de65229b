# SPDX-License-Identifier: MIT

import typer
from rich import box
from rich.console import Console
from rich.table import Table

from timeblocks.repository.storage import STORAGE_REPO
from timeblocks.terminal.custom_typer import AliasedTyperGroup
from timeblocks.terminal.notify import notify, persist_changes

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


@app.command("list, ls")
def list_projects() -> None:
    """Show the project catalog in the order projects were added."""
    projects_table = Table(box=box.SIMPLE)
    projects_table.add_column("project")
    for project in STORAGE_REPO.get_projects():
        projects_table.add_row(project)

    console = Console()
    console.print(projects_table)


@app.command("add, a", no_args_is_help=True)
def add(name: str) -> None:
    """Add a project name to the catalog."""
    if not name.strip():
        typer.echo("Project name must not be empty")
        raise typer.Exit(1)

    if STORAGE_REPO.add_project(name):
        persist_changes()
        notify(f"Added project {name.strip()}")
    else:
        notify(f"Project {name.strip()} already exists")
