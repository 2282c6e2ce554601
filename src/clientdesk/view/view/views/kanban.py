# SPDX-License-Identifier: MIT

from typing import Optional

import pendulum
from rich import box
from rich.columns import Columns
from rich.console import Console
from rich.table import Table

from clientdesk.color import COLUMN_COLORS, HIGHLIGHT_COLOR, rich_color
from clientdesk.model.entity_id import EntityId
from clientdesk.model.task import TASK_STATUSES, Task, TaskStatus
from clientdesk.service.display import get_priority_color, get_status_label
from clientdesk.view.view.util import render_due_date, synthetic_task_id
from clientdesk.view.view.views.header import header


def __column_table(
    status: TaskStatus,
    tasks: list[Task],
    just_dropped_task_id: Optional[EntityId],
    updating_task_ids: set[EntityId],
    today: Optional[pendulum.Date],
) -> Table:
    color = COLUMN_COLORS.get(status, "white")
    column_table = Table(
        box=box.ROUNDED,
        title=f"[bold {color}]{get_status_label(status)}[/bold {color}] ({len(tasks)})",
        show_header=False,
        min_width=28,
    )
    column_table.add_column("card")

    for task in tasks:
        priority_color = rich_color(get_priority_color(task["priority"]))
        card = (
            f"[bold]{synthetic_task_id(task)}[/bold] {task['title']}\n"
            f"[{priority_color}]{task['priority']}[/{priority_color}]"
        )
        if task["due_date"] is not None:
            card += f"  {render_due_date(task, today)}"
        if task.get("client_name"):
            card += f"\n[italic]{task['client_name']}[/italic]"
        if task["id"] in updating_task_ids:
            card += "\n[dim]saving...[/dim]"

        style = HIGHLIGHT_COLOR if task["id"] == just_dropped_task_id else None
        column_table.add_row(card, style=style)

    return column_table


def kanban_view(
    columns: dict[TaskStatus, list[Task]],
    just_dropped_task_id: Optional[EntityId] = None,
    updating_task_ids: Optional[set[EntityId]] = None,
    today: Optional[pendulum.Date] = None,
) -> None:
    header("board")

    tables = [
        __column_table(
            status,
            columns.get(status, []),
            just_dropped_task_id,
            updating_task_ids or set(),
            today,
        )
        for status in TASK_STATUSES
    ]

    console = Console()
    console.print(Columns(tables, padding=(0, 2)))
