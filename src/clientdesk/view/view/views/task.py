# SPDX-License-Identifier: MIT

from typing import Optional

import pendulum
from rich import box
from rich.console import Console
from rich.table import Table

from clientdesk.color import COMPLETED_TASK_COLOR, rich_color
from clientdesk.model.task import GroupedTasks, Task, TaskCounts, is_done_status
from clientdesk.service.display import (
    get_priority_color,
    get_priority_label,
    get_status_label,
)
from clientdesk.time import datetime_to_iso_str_optional
from clientdesk.view.view.util import render_due_date, synthetic_task_id, task_state
from clientdesk.view.view.views.header import header

GROUP_TITLES: dict[str, str] = {
    "overdue": "Overdue",
    "today": "Today",
    "upcoming": "Upcoming",
    "no_due_date": "No due date",
    "completed": "Completed",
}


def tasks_view(
    report_name: str,
    tasks: list[Task],
    columns: list[str] = [
        "id",
        "state",
        "due",
        "priority",
        "title",
        "client",
    ],
    today: Optional[pendulum.Date] = None,
    use_color: bool = True,
    show_header: bool = True,
) -> None:
    if show_header:
        header(report_name)

    tasks_table = Table(box=box.SIMPLE)
    for column in columns:
        tasks_table.add_column(column)

    for task in tasks:
        row = []
        for column in columns:
            column_value = ""
            if column == "id":
                column_value = synthetic_task_id(task)
            elif column == "state":
                column_value = task_state(task)
            elif column == "due":
                column_value = render_due_date(task, today) if use_color else str(
                    task["due_date"] or ""
                )
            elif column == "priority":
                column_value = task["priority"]
                if use_color and not is_done_status(task["status"]):
                    color = rich_color(get_priority_color(task["priority"]))
                    column_value = f"[{color}]{column_value}[/{color}]"
            elif column == "status":
                column_value = get_status_label(task["status"])
            elif column == "client":
                column_value = task.get("client_name") or ""
            elif task.get(column) is not None:
                column_value = str(task[column])  # type: ignore[literal-required]

            if use_color and is_done_status(task["status"]) and column != "due":
                column_value = f"[{COMPLETED_TASK_COLOR}]{column_value}[/{COMPLETED_TASK_COLOR}]"

            row.append(column_value)
        tasks_table.add_row(*row)

    console = Console()
    console.print(tasks_table)


def grouped_tasks_view(
    groups: GroupedTasks,
    counts: TaskCounts,
    show_completed: bool = True,
    today: Optional[pendulum.Date] = None,
) -> None:
    header("tasks")

    console = Console()
    console.print(
        f" [bold red]{counts['overdue']} overdue[/bold red]"
        f"  [bold dark_orange]{counts['today']} due today[/bold dark_orange]"
        f"  {counts['upcoming']} upcoming"
    )

    shown = 0
    for key, title in GROUP_TITLES.items():
        if key == "completed" and not show_completed:
            continue
        group_tasks: list[Task] = groups[key]  # type: ignore[literal-required]
        if len(group_tasks) == 0:
            continue
        shown += 1
        console.print(f"\n [bold]{title}[/bold] ({len(group_tasks)})")
        tasks_view(title, group_tasks, today=today, show_header=False)

    if shown == 0:
        console.print("\n No tasks match your current filters.")


def single_task_view(task: Task, today: Optional[pendulum.Date] = None) -> None:
    header("task")

    task_table = Table(box=box.SIMPLE)
    task_table.add_column("property")
    task_table.add_column("value")

    task_table.add_row("id", synthetic_task_id(task))
    task_table.add_row("title", task["title"])
    task_table.add_row("description", task["description"] or "")
    task_table.add_row("client", task.get("client_name") or "")
    task_table.add_row("status", get_status_label(task["status"]))
    task_table.add_row("priority", get_priority_label(task["priority"]))
    task_table.add_row("due", task["due_date"] or "")
    task_table.add_row("urgency", render_due_date(task, today))
    task_table.add_row(
        "completed_at", datetime_to_iso_str_optional(task["completed_at"]) or ""
    )
    task_table.add_row("created", task["created"].to_date_string())
    task_table.add_row("updated", task["updated"].to_date_string())

    console = Console()
    console.print(task_table)
