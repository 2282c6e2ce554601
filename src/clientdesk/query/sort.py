# SPDX-License-Identifier: MIT

from typing import Optional

import pendulum

from clientdesk.model.task import PRIORITY_RANK, Task
from clientdesk.time import try_parse_due_date


def priority_rank(task: Task) -> int:
    return PRIORITY_RANK.get(task["priority"], 0)


def sort_tasks_by_urgency(tasks: list[Task]) -> list[Task]:
    """
    Sort tasks by due date (ascending) then priority (descending).

    Tasks without a usable due date go last, keeping their relative order.
    The sort is stable and the input list is left untouched.
    """
    dated: list[tuple[pendulum.Date, Task]] = []
    undated: list[Task] = []
    for task in tasks:
        due: Optional[pendulum.Date] = try_parse_due_date(task["due_date"])
        if due is None:
            undated.append(task)
        else:
            dated.append((due, task))

    dated.sort(key=lambda pair: (pair[0], -priority_rank(pair[1])))
    return [task for _, task in dated] + undated
