# SPDX-License-Identifier: MIT

from abc import ABC, abstractmethod
from typing import Optional

import pendulum

from clientdesk.model.task import TASK_PRIORITIES, TASK_STATUSES, Task, TaskFilters
from clientdesk.time import parse_due_date, try_parse_due_date


def generate_task_filter(filters: Optional[TaskFilters]) -> "And":
    """Combine the active filters; "all" and missing keys match everything."""
    filter_obj = And()
    if filters is None:
        return filter_obj

    status = filters.get("status")
    if status is not None and status != "all":
        if status not in TASK_STATUSES:
            raise ValueError(f"unknown status filter: {status}")
        filter_obj.add_predicate(Status(status))

    priority = filters.get("priority")
    if priority is not None and priority != "all":
        if priority not in TASK_PRIORITIES:
            raise ValueError(f"unknown priority filter: {priority}")
        filter_obj.add_predicate(Priority(priority))

    due_before = filters.get("due_before")
    if due_before is not None:
        filter_obj.add_predicate(DueBefore(parse_due_date(due_before)))

    due_after = filters.get("due_after")
    if due_after is not None:
        filter_obj.add_predicate(DueAfter(parse_due_date(due_after)))

    return filter_obj


def filter_tasks(tasks: list[Task], filters: Optional[TaskFilters]) -> list[Task]:
    return generate_task_filter(filters).filter(tasks)


class Predicate(ABC):
    @abstractmethod
    def filter(self, items: list[Task]) -> list[Task]: ...


class And(Predicate):
    def __init__(self) -> None:
        self.predicates: list[Predicate] = []

    def add_predicate(self, predicate: Predicate) -> None:
        self.predicates.append(predicate)

    def filter(self, items: list[Task]) -> list[Task]:
        result = list(items)
        for predicate in self.predicates:
            result = predicate.filter(result)
        return result


class Status(Predicate):
    def __init__(self, status: str) -> None:
        self.status = status

    def filter(self, items: list[Task]) -> list[Task]:
        return [item for item in items if item["status"] == self.status]


class Priority(Predicate):
    def __init__(self, priority: str) -> None:
        self.priority = priority

    def filter(self, items: list[Task]) -> list[Task]:
        return [item for item in items if item["priority"] == self.priority]


class DueBefore(Predicate):
    def __init__(self, reference_date: pendulum.Date) -> None:
        self.reference_date = reference_date

    def filter(self, items: list[Task]) -> list[Task]:
        filtered_items = []
        for item in items:
            due = try_parse_due_date(item["due_date"])
            if due is not None and due < self.reference_date:
                filtered_items.append(item)
        return filtered_items


class DueAfter(Predicate):
    def __init__(self, reference_date: pendulum.Date) -> None:
        self.reference_date = reference_date

    def filter(self, items: list[Task]) -> list[Task]:
        filtered_items = []
        for item in items:
            due = try_parse_due_date(item["due_date"])
            if due is not None and due > self.reference_date:
                filtered_items.append(item)
        return filtered_items
