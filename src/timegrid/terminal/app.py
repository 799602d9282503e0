# SPDX-License-Identifier: MIT

from typing import Annotated

import typer

from timegrid.logger import configure_logging
from timegrid.terminal import configuration, event, gesture, view
from timegrid.terminal.custom_typer import OrderedAliasedTyperGroup
from timegrid.terminal.zoom import zoom
from timegrid.view import state as view_state

app = typer.Typer(
    cls=OrderedAliasedTyperGroup,
    help="timegrid - calendar time grid in the CLI",
    no_args_is_help=True,
)
app.add_typer(configuration.app, name="config, c")
app.add_typer(event.app, name="event, e")
app.add_typer(view.app, name="view, v")
app.command(name="zoom, z")(zoom)
app.add_typer(gesture.app, name="gesture, g")


@app.callback()
def main_callback(
    no_header: Annotated[
        bool,
        typer.Option(
            "--no-header",
            "-nh",
            help="Suppress header output in views",
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-V", help="Log engine decisions to stderr"),
    ] = False,
) -> None:
    """
    timegrid - calendar time grid in the CLI

    Global options that apply to all commands.
    """
    configure_logging(verbose)
    if no_header:
        view_state.set_show_header(False)


def run() -> None:
    app()
