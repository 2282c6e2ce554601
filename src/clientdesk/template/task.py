# SPDX-License-Identifier: MIT

from clientdesk.model.task import Task
from clientdesk.time import now_utc


def get_task_template() -> Task:
    now = now_utc()
    return {
        "id": None,
        "client_id": None,
        "client_name": None,
        "title": "",
        "description": None,
        "due_date": None,
        "priority": "medium",
        "status": "todo",
        "completed_at": None,
        "created": now,
        "updated": now,
    }
