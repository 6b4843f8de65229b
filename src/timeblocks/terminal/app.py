# SPDX-License-Identifier: MIT

import logging
from typing import Annotated

import typer
from rich.logging import RichHandler

from timeblocks.terminal import configuration, project, tracker
from timeblocks.terminal.custom_typer import OrderedAliasedTyperGroup
from timeblocks.terminal.export import export
from timeblocks.terminal.watch import watch
from timeblocks.view import state as view_state

app = typer.Typer(
    cls=OrderedAliasedTyperGroup,
    help="timeblocks - time tracking inside Markdown code blocks",
    no_args_is_help=True,
)
app.add_typer(tracker.app, name="tracker, tr")
app.add_typer(project.app, name="project, p")
app.add_typer(configuration.app, name="config, c")
app.command(name="export, x")(export)
app.command(name="watch, w")(watch)


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
    )


@app.callback()
def main_callback(
    no_header: Annotated[
        bool,
        typer.Option(
            "--no-header",
            "-nh",
            help="Suppress header output in reports",
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-V", help="Log debug output"),
    ] = False,
) -> None:
    """
    timeblocks - time tracking inside Markdown code blocks

    Global options that apply to all commands.
    """
    configure_logging(verbose)
    if no_header:
        view_state.set_show_header(False)


def run() -> None:
    app()
