# SPDX-License-Identifier: MIT

from typing import Literal, NotRequired, Optional, TypedDict

import pendulum

from clientdesk.model.entity_id import EntityId

TaskStatus = Literal["todo", "in_progress", "closed"]
LegacyTaskStatus = Literal["pending", "completed"]
TaskPriority = Literal["low", "medium", "high"]

TASK_STATUSES: tuple[TaskStatus, ...] = ("todo", "in_progress", "closed")
TASK_PRIORITIES: tuple[TaskPriority, ...] = ("low", "medium", "high")

# Statuses that mean the task is finished, across both status schemas
DONE_STATUSES = frozenset({"closed", "completed"})

PRIORITY_RANK: dict[str, int] = {"high": 3, "medium": 2, "low": 1}


class Task(TypedDict):
    id: Optional[EntityId]
    client_id: Optional[EntityId]
    client_name: NotRequired[Optional[str]]
    title: str
    description: Optional[str]
    due_date: Optional[str]
    priority: TaskPriority
    status: TaskStatus | LegacyTaskStatus
    completed_at: Optional[pendulum.DateTime]
    created: pendulum.DateTime
    updated: pendulum.DateTime


class TaskDisplayInfo(TypedDict):
    is_overdue: bool
    is_due_today: bool
    is_due_tomorrow: bool
    days_until_due: Optional[int]
    priority_color: str
    status_color: str


class TaskFilters(TypedDict, total=False):
    status: TaskStatus | Literal["all"]
    priority: TaskPriority | Literal["all"]
    due_before: str
    due_after: str


class GroupedTasks(TypedDict):
    overdue: list[Task]
    today: list[Task]
    upcoming: list[Task]
    no_due_date: list[Task]
    completed: list[Task]


class TaskCounts(TypedDict):
    overdue: int
    today: int
    upcoming: int


def is_done_status(status: str) -> bool:
    return status in DONE_STATUSES
