# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console

from clientdesk import configuration
from clientdesk.id_map import clear_id_map_if_required, resolve_client_id
from clientdesk.model.import_row import ImportRowData
from clientdesk.repository.client import CLIENT_REPO
from clientdesk.repository.configuration import CONFIGURATION_REPO
from clientdesk.service.csv_import import (
    build_bulk_import_request,
    parse_csv_file,
    validate_all_rows,
    validate_import_row,
    write_csv_template,
)
from clientdesk.template.client import get_client_template
from clientdesk.terminal.custom_typer import AliasedTyperGroup
from clientdesk.view.view.views import client as client_report
from clientdesk.view.view.views import import_review as import_report

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


@app.command("add, a", no_args_is_help=True)
def add(
    name: str,
    email: Annotated[str, typer.Option("--email", "-e")],
    phone: Annotated[Optional[str], typer.Option("--phone", "-p")] = None,
    birthday: Annotated[
        Optional[str], typer.Option("--birthday", "-b", help="valid input: YYYY-MM-DD")
    ] = None,
    address: Annotated[Optional[str], typer.Option("--address", "-ad")] = None,
    tags: Annotated[
        Optional[list[str]],
        typer.Option("--tag", "-t", help="accepts multiple tag options"),
    ] = None,
) -> None:
    data: ImportRowData = {
        "name": name,
        "email": email,
        "phone": phone or "",
        "birthday": birthday or "",
        "address": address or "",
        "tags": ", ".join(tags) if tags else "",
    }
    errors = validate_import_row(data)
    if CLIENT_REPO.find_by_email(email) is not None:
        errors["email"] = f"A client with email {email} already exists"
    if errors:
        console = Console(stderr=True)
        for field, message in errors.items():
            console.print(f"[bold red]{field}:[/bold red] {message}")
        raise typer.Exit(code=1)

    # Same normalisation as a one-row import
    request = build_bulk_import_request(
        [
            {
                "id": "add",
                "row_index": 0,
                "data": data,
                "is_valid": True,
                "errors": {},
            }
        ]
    )
    new_client = request["clients"][0]

    client = get_client_template()
    client["name"] = new_client["name"]
    client["email"] = new_client["email"]
    client["phone"] = new_client.get("phone")
    client["birthday"] = new_client.get("birthday")
    client["address"] = new_client.get("address")
    client["tags"] = new_client.get("tags")
    id = CLIENT_REPO.save_new_client(client)

    client_report.single_client_view(CLIENT_REPO.get_client(id))


@app.command("list, ls")
def list_clients() -> None:
    clear_id_map_if_required()
    client_report.clients_view(CLIENT_REPO.get_all_clients())


@app.command("show, s", no_args_is_help=True)
def show(id: int) -> None:
    client_report.single_client_view(CLIENT_REPO.get_client(resolve_client_id(id)))


@app.command("template, tp", no_args_is_help=True)
def template(path: Path) -> None:
    """Write a CSV import template with the expected columns and two example rows."""
    write_csv_template(path)
    console = Console()
    console.print(f"[green]Template written to {path}[/green]")


@app.command("import, i", no_args_is_help=True)
def import_clients(
    path: Path,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", "-n", help="validate and review without importing"),
    ] = False,
    errors_only: Annotated[
        bool, typer.Option("--errors-only", "-eo", help="only list rows with errors")
    ] = False,
) -> None:
    """
    Import clients from a CSV file.

    Every row is validated first. Rows with errors are listed and skipped; the
    remaining rows are imported.
    """
    config = CONFIGURATION_REPO.get_config()
    max_rows = config.get("max_import_rows", configuration.DEFAULT_MAX_IMPORT_ROWS)

    rows, warnings = parse_csv_file(path, max_rows)
    import_rows = validate_all_rows(rows)

    import_report.import_review_view(import_rows, warnings, errors_only=errors_only)

    if dry_run:
        return

    request = build_bulk_import_request(import_rows)
    if len(request["clients"]) == 0:
        console = Console(stderr=True)
        console.print("[bold red]No valid rows to import.[/bold red]")
        raise typer.Exit(code=1)

    result = CLIENT_REPO.import_clients(request)
    import_report.import_result_view(result)
