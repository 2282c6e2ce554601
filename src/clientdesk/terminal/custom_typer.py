# SPDX-License-Identifier: MIT

import re
from typing import Any, Optional

import click
import typer
import typer.core
from rich.console import Console

from clientdesk.errors import ClientDeskError

ALIAS_SEPARATOR = re.compile(r"\s*,\s*")

# Top-level commands in help output order
COMMAND_ORDER = ["config, c", "task, t", "client, cl"]


class AliasedTyperGroup(typer.core.TyperGroup):
    """
    Group whose commands are registered as "name, alias" and callable by either.

    Domain errors raised by a command are printed in red and end the run with
    exit status 1 instead of a traceback.
    """

    def _aliases(self) -> dict[str, str]:
        aliases: dict[str, str] = {}
        for registered_name in self.commands:
            for alias in ALIAS_SEPARATOR.split(registered_name):
                aliases[alias] = registered_name
        return aliases

    def get_command(self, ctx: click.Context, cmd_name: str) -> Optional[click.Command]:
        return super().get_command(ctx, self._aliases().get(cmd_name, cmd_name))

    def add_command(self, cmd: click.Command, name: Optional[str] = None) -> None:
        name = name or cmd.name
        registered_name = self._aliases().get(name or "")
        if registered_name is not None and registered_name != name:
            # Already present under its "name, alias" form
            return
        super().add_command(cmd, name)

    def invoke(self, ctx: click.Context) -> Any:
        try:
            return super().invoke(ctx)
        except ClientDeskError as e:
            Console(stderr=True).print(f"[bold red]Error:[/bold red] {e}")
            raise typer.Exit(code=1)


class OrderedAliasedTyperGroup(AliasedTyperGroup):
    def list_commands(self, ctx: click.Context) -> list[str]:
        ordered = [name for name in COMMAND_ORDER if name in self.commands]
        return ordered + [name for name in self.commands if name not in ordered]
