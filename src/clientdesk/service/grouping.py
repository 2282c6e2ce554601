# SPDX-License-Identifier: MIT

import logging
from typing import Optional

import pendulum

from clientdesk.errors import InvalidDueDateError
from clientdesk.model.task import GroupedTasks, Task, TaskCounts, is_done_status
from clientdesk.time import is_past, is_today, parse_due_date_optional, today_local

logger = logging.getLogger(__name__)


def _due_date_or_none(task: Task) -> Optional[pendulum.Date]:
    try:
        return parse_due_date_optional(task["due_date"])
    except InvalidDueDateError:
        logger.warning(
            "task %s has a malformed due date %r, treating it as undated",
            task["id"],
            task["due_date"],
        )
        return None


def group_tasks_by_due_date(
    tasks: list[Task], today: Optional[pendulum.Date] = None
) -> GroupedTasks:
    """
    Partition tasks into overdue, today, upcoming, no_due_date and completed.

    Checks run in a fixed order: done status first, so a finished task never
    shows up as overdue; then missing due date; then today; then past.
    Every task lands in exactly one bucket, in input order.
    """
    reference = today if today is not None else today_local()
    groups: GroupedTasks = {
        "overdue": [],
        "today": [],
        "upcoming": [],
        "no_due_date": [],
        "completed": [],
    }

    for task in tasks:
        if is_done_status(task["status"]):
            groups["completed"].append(task)
            continue

        due = _due_date_or_none(task)
        if due is None:
            groups["no_due_date"].append(task)
        elif is_today(due, reference):
            groups["today"].append(task)
        elif is_past(due, reference):
            groups["overdue"].append(task)
        else:
            groups["upcoming"].append(task)

    return groups


def count_tasks_by_category(
    tasks: list[Task], today: Optional[pendulum.Date] = None
) -> TaskCounts:
    """Dashboard counters; done tasks and undated tasks are not counted."""
    groups = group_tasks_by_due_date(tasks, today)
    return {
        "overdue": len(groups["overdue"]),
        "today": len(groups["today"]),
        "upcoming": len(groups["upcoming"]),
    }
