# SPDX-License-Identifier: MIT

from rich import box
from rich.console import Console
from rich.table import Table

from clientdesk.model.client import Client
from clientdesk.repository.id_map import ID_MAP_REPO
from clientdesk.view.view.util import format_tags
from clientdesk.view.view.views.header import header


def clients_view(clients: list[Client]) -> None:
    header("clients")

    clients_table = Table(box=box.SIMPLE)
    clients_table.add_column("id")
    clients_table.add_column("name")
    clients_table.add_column("email")
    clients_table.add_column("phone")
    clients_table.add_column("birthday")
    clients_table.add_column("tags")

    for client in clients:
        clients_table.add_row(
            str(ID_MAP_REPO.associate_id("clients", client["id"])),
            client["name"],
            client["email"],
            client["phone"] or "",
            client["birthday"] or "",
            format_tags(client["tags"]),
        )

    console = Console()
    console.print(clients_table)


def single_client_view(client: Client) -> None:
    header("client")

    client_table = Table(box=box.SIMPLE)
    client_table.add_column("property")
    client_table.add_column("value")

    client_table.add_row("id", str(ID_MAP_REPO.associate_id("clients", client["id"])))
    client_table.add_row("name", client["name"])
    client_table.add_row("email", client["email"])
    client_table.add_row("phone", client["phone"] or "")
    client_table.add_row("birthday", client["birthday"] or "")
    client_table.add_row("address", client["address"] or "")
    client_table.add_row("tags", format_tags(client["tags"]))
    client_table.add_row("created", client["created"].to_date_string())

    console = Console()
    console.print(client_table)
