# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer

from clientdesk import state as app_state
from clientdesk.logger import configure_logging
from clientdesk.terminal import client, configuration, task
from clientdesk.terminal.custom_typer import OrderedAliasedTyperGroup
from clientdesk.terminal.validate import validate_log_level

app = typer.Typer(
    cls=OrderedAliasedTyperGroup,
    help="ClientDesk - Clients and their tasks in the CLI",
    no_args_is_help=True,
)
app.add_typer(configuration.app, name="config, c")
app.add_typer(task.app, name="task, t")
app.add_typer(client.app, name="client, cl")


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
    clear_ids: Annotated[
        Optional[bool],
        typer.Option(
            "--clear-ids/--no-clear-ids",
            help="Clear ID map before list commands",
        ),
    ] = None,
    log_level: Annotated[
        Optional[str],
        typer.Option(
            "--log-level",
            callback=validate_log_level,
            help="Override the configured log level for this run",
        ),
    ] = None,
) -> None:
    """
    ClientDesk - Clients and their tasks in the CLI

    Global options that apply to all commands.
    """
    if no_header:
        app_state.set_show_header(False)
    if clear_ids is not None:
        app_state.set_clear_ids(clear_ids)
    if log_level is not None:
        configure_logging(log_level)


def run() -> None:
    app()
