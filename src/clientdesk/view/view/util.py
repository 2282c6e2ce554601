# SPDX-License-Identifier: MIT

from typing import Optional

import pendulum

from clientdesk.color import COMPLETED_TASK_COLOR, DUE_TODAY_COLOR, OVERDUE_COLOR
from clientdesk.errors import InvalidDueDateError
from clientdesk.model.task import Task, is_done_status
from clientdesk.repository.id_map import ID_MAP_REPO
from clientdesk.service.display import format_due_date, get_task_display_info


def task_state(task: Task) -> str:
    """
    Get the state symbol for a task.

    Returns:
        State symbol: "X" if done, ">" if in progress, " " if open
    """
    if is_done_status(task["status"]):
        return "X"
    elif task["status"] == "in_progress":
        return ">"
    return " "


def format_tags(tags: Optional[list[str]]) -> str:
    """Format a list of tags as a comma-separated string without brackets or quotes."""
    if tags is None or len(tags) == 0:
        return ""
    return ", ".join(tags)


def synthetic_task_id(task: Task) -> str:
    if task["id"] is None:
        return ""
    return str(ID_MAP_REPO.associate_id("tasks", task["id"]))


def render_due_date(task: Task, today: Optional[pendulum.Date] = None) -> str:
    """Due date text with urgency coloring; malformed dates are shown as-is."""
    try:
        text = format_due_date(task, today)
        display_info = get_task_display_info(task, today)
    except InvalidDueDateError:
        return f"[red]{task['due_date']} (invalid)[/red]"

    if is_done_status(task["status"]):
        return f"[{COMPLETED_TASK_COLOR}]{text}[/{COMPLETED_TASK_COLOR}]"
    if display_info["is_overdue"]:
        return f"[{OVERDUE_COLOR}]{text}[/{OVERDUE_COLOR}]"
    if display_info["is_due_today"]:
        return f"[{DUE_TODAY_COLOR}]{text}[/{DUE_TODAY_COLOR}]"
    return text
