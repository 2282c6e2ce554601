# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

from clientdesk import configuration
from clientdesk.repository.configuration import (
    CONFIGURATION_REPO,
)
from clientdesk.terminal.custom_typer import AliasedTyperGroup
from clientdesk.terminal.validate import validate_log_level, validate_positive

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


def __configuration_table(
    config: configuration.Configuration, title: Optional[str] = None
) -> Table:
    table = Table(title=title)
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="magenta")

    table.add_row("data_path", str(configuration.DATA_PATH))
    table.add_row(
        "show_header",
        "✓ Enabled" if config["show_header"] else "✗ Disabled",
    )
    table.add_row(
        "clear_ids_on_view",
        "✓ Enabled" if config["clear_ids_on_view"] else "✗ Disabled",
    )
    table.add_row(
        "highlight_seconds",
        str(config.get("highlight_seconds", configuration.DEFAULT_HIGHLIGHT_SECONDS)),
    )
    table.add_row(
        "max_import_rows",
        str(config.get("max_import_rows", configuration.DEFAULT_MAX_IMPORT_ROWS)),
    )
    table.add_row(
        "log_level", config.get("log_level", configuration.DEFAULT_LOG_LEVEL)
    )
    return table


@app.command("view, v")
def view() -> None:
    """Display current configuration settings."""
    config = CONFIGURATION_REPO.get_config()

    console = Console()
    console.print(__configuration_table(config))


@app.command("set, s")
def set(
    data_path: Annotated[
        Optional[str],
        typer.Option(
            "--data-path",
            help="Directory path for storing data files",
        ),
    ] = None,
    remove_data_path: Annotated[
        bool,
        typer.Option(
            "--remove-data-path",
            help="Reset data path to the platform default",
        ),
    ] = False,
    show_header: Annotated[
        Optional[bool],
        typer.Option(
            "--show-header/--no-show-header",
            help="Enable/disable the header above reports",
        ),
    ] = None,
    clear_ids_on_view: Annotated[
        Optional[bool],
        typer.Option(
            "--clear-ids-on-view/--no-clear-ids-on-view",
            help="Enable/disable automatic clearing of ID map before list commands",
        ),
    ] = None,
    highlight_seconds: Annotated[
        Optional[float],
        typer.Option(
            "--highlight-seconds",
            callback=validate_positive,
            help="How long a moved card stays highlighted on the board",
        ),
    ] = None,
    max_import_rows: Annotated[
        Optional[int],
        typer.Option(
            "--max-import-rows",
            min=1,
            help="Largest CSV file, in rows, accepted by client import",
        ),
    ] = None,
    log_level: Annotated[
        Optional[str],
        typer.Option(
            "--log-level",
            callback=validate_log_level,
            help="DEBUG, INFO, WARNING, ERROR or CRITICAL",
        ),
    ] = None,
) -> None:
    """
    Update configuration settings.
    """
    CONFIGURATION_REPO.update_config(
        data_path=data_path,
        remove_data_path=remove_data_path,
        show_header=show_header,
        clear_ids_on_view=clear_ids_on_view,
        highlight_seconds=highlight_seconds,
        max_import_rows=max_import_rows,
        log_level=log_level,
    )

    config = CONFIGURATION_REPO.get_config()

    console = Console()
    console.print("[green]Configuration updated successfully![/green]\n")
    console.print(__configuration_table(config, title="Updated Configuration"))
