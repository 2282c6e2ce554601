# SPDX-License-Identifier: MIT

from typing import Optional

from rich.console import Console
from rich.padding import Padding
from rich.text import Text

from clientdesk.configuration import APP_NAME
from clientdesk.state import get_show_header
from clientdesk.time import date_to_display_str, today_local


def header(sub_header: Optional[str] = None) -> None:
    """Print the app name, the view name and today's date above a view."""
    if not get_show_header():
        return

    title = Text(APP_NAME, style="dark_orange")
    if sub_header is not None:
        title.append(f"  {sub_header}", style="sandy_brown")
    title.append(f"  {date_to_display_str(today_local())}", style="bright_black")

    console = Console()
    console.print(Padding(title, (1, 0, 0, 1)))
