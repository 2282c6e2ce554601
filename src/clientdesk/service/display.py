# SPDX-License-Identifier: MIT

from typing import Optional

import pendulum

from clientdesk.model.task import Task, TaskDisplayInfo, is_done_status
from clientdesk.time import (
    date_to_display_str,
    days_until,
    is_past,
    is_today,
    is_tomorrow,
    parse_due_date_optional,
    today_local,
)


def get_task_display_info(
    task: Task, today: Optional[pendulum.Date] = None
) -> TaskDisplayInfo:
    """
    Compute the urgency facts shown on a task card.

    Recomputed from the task and the current date on every call, never cached.

    Raises:
        InvalidDueDateError: If the task carries a malformed due date
    """
    reference = today if today is not None else today_local()
    due = parse_due_date_optional(task["due_date"])

    if due is None:
        return {
            "is_overdue": False,
            "is_due_today": False,
            "is_due_tomorrow": False,
            "days_until_due": None,
            "priority_color": get_priority_color(task["priority"]),
            "status_color": get_status_color(task["status"]),
        }

    return {
        "is_overdue": not is_done_status(task["status"]) and is_past(due, reference),
        "is_due_today": is_today(due, reference),
        "is_due_tomorrow": is_tomorrow(due, reference),
        "days_until_due": days_until(due, reference),
        "priority_color": get_priority_color(task["priority"]),
        "status_color": get_status_color(task["status"]),
    }


def get_status_color(status: str) -> str:
    match status:
        case "closed" | "completed":
            return "success"
        case "in_progress":
            return "primary"
    return "default"


def get_priority_color(priority: str) -> str:
    match priority:
        case "high":
            return "error"
        case "medium":
            return "warning"
        case "low":
            return "success"
    return "default"


def get_priority_label(priority: str) -> str:
    match priority:
        case "high":
            return "High Priority"
        case "medium":
            return "Medium Priority"
        case "low":
            return "Low Priority"
    return "Unknown"


def get_status_label(status: str) -> str:
    match status:
        case "closed":
            return "Closed"
        case "in_progress":
            return "In Progress"
        case "todo":
            return "To Do"
        case "pending":
            return "Pending"
        case "completed":
            return "Completed"
    return "Unknown"


def format_relative_days(days: int) -> str:
    if days == 0:
        return "today"
    if days == 1:
        return "tomorrow"
    if days == -1:
        return "yesterday"
    if days > 0:
        return f"in {days} days"
    return f"{-days} days ago"


def format_due_date(task: Task, today: Optional[pendulum.Date] = None) -> str:
    """Due date text for a card: overdue, today, tomorrow, relative within a week."""
    reference = today if today is not None else today_local()
    due = parse_due_date_optional(task["due_date"])
    if due is None:
        return "No due date"

    display_info = get_task_display_info(task, reference)
    days = display_info["days_until_due"]
    if display_info["is_overdue"]:
        return f"Overdue ({format_relative_days(days or 0)})"
    if display_info["is_due_today"]:
        return "Today"
    if display_info["is_due_tomorrow"]:
        return "Tomorrow"
    if days is not None and days <= 7:
        return format_relative_days(days)
    return date_to_display_str(due)
