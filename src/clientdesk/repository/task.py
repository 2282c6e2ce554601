# SPDX-License-Identifier: MIT

from copy import deepcopy
from typing import Any, Optional, cast

from yaml import dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader  # noqa: F401
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from clientdesk import configuration, time
from clientdesk.errors import TaskNotFoundError
from clientdesk.model.entity_id import EntityId, generate_entity_id
from clientdesk.model.task import (
    Task,
    TaskFilters,
    TaskPriority,
    TaskStatus,
    is_done_status,
)
from clientdesk.query.filter import filter_tasks
from clientdesk.repository.client import CLIENT_REPO


class TaskRepository:
    """Task data source backed by one YAML file per task."""

    def __init__(self) -> None:
        self._tasks: Optional[list[Task]] = None
        self.is_dirty = False
        self._dirty_ids: set[str] = set()

    @property
    def tasks(self) -> list[Task]:
        if self._tasks is None:
            self.__load_data()
        if self._tasks is None:
            raise ValueError()
        return self._tasks

    def __load_data(self) -> None:
        self._tasks = []
        if not configuration.DATA_TASKS_DIR.is_dir():
            return
        for file_path in sorted(configuration.DATA_TASKS_DIR.iterdir()):
            if file_path.suffix != ".yaml":
                continue
            raw_task = load(file_path.read_text(), Loader=Loader)
            if raw_task is not None:
                self._tasks.append(self.__convert_task_for_deserialization(raw_task))
        self._tasks.sort(key=lambda task: task["created"])

    def __save_data(self) -> None:
        configuration.DATA_TASKS_DIR.mkdir(parents=True, exist_ok=True)
        for task in self.tasks:
            if task["id"] in self._dirty_ids:
                serializable_task = self.__convert_task_for_serialization(
                    deepcopy(task)
                )
                file_path = configuration.DATA_TASKS_DIR / f"{task['id']}.yaml"
                file_path.write_text(dump(serializable_task, Dumper=Dumper))

        self._dirty_ids.clear()

    def flush(self) -> bool:
        if self._tasks is not None and self.is_dirty:
            self.__save_data()
            self.is_dirty = False
            return True
        return False

    def reset(self) -> None:
        self._tasks = None
        self.is_dirty = False
        self._dirty_ids.clear()

    def __convert_task_for_serialization(self, task: Task) -> dict[str, Any]:
        serializable_task = cast(dict[str, Any], task)
        serializable_task.pop("client_name", None)
        serializable_task["completed_at"] = time.datetime_to_iso_str_optional(
            serializable_task["completed_at"]
        )
        serializable_task["created"] = time.datetime_to_iso_str(
            serializable_task["created"]
        )
        serializable_task["updated"] = time.datetime_to_iso_str(
            serializable_task["updated"]
        )
        return serializable_task

    def __convert_task_for_deserialization(self, task: dict[str, Any]) -> Task:
        deserializable_task = task
        deserializable_task["completed_at"] = time.datetime_from_str_optional(
            deserializable_task.get("completed_at")
        )
        deserializable_task["created"] = time.datetime_from_str(
            deserializable_task["created"]
        )
        deserializable_task["updated"] = time.datetime_from_str(
            deserializable_task["updated"]
        )
        return cast(Task, deserializable_task)

    def __find(self, id: EntityId) -> Task:
        for task in self.tasks:
            if task["id"] == id:
                return task
        raise TaskNotFoundError(id)

    def __with_client_name(self, task: Task) -> Task:
        task_copy = deepcopy(task)
        task_copy["client_name"] = (
            CLIENT_REPO.get_client_name(task["client_id"])
            if task["client_id"] is not None
            else None
        )
        return task_copy

    def save_new_task(self, task: Task) -> EntityId:
        self.is_dirty = True

        task["id"] = generate_entity_id()
        task.pop("client_name", None)
        if task["due_date"] is not None:
            task["due_date"] = time.date_to_str(time.parse_due_date(task["due_date"]))
        if is_done_status(task["status"]) and task["completed_at"] is None:
            task["completed_at"] = time.now_utc()

        self.tasks.append(task)
        self._dirty_ids.add(task["id"])

        return task["id"]

    def modify_task(
        self,
        id: EntityId,
        title: Optional[str] = None,
        description: Optional[str] = None,
        due_date: Optional[str] = None,
        priority: Optional[TaskPriority] = None,
        remove_description: bool = False,
        remove_due_date: bool = False,
    ) -> None:
        task = self.__find(id)

        self.is_dirty = True
        self._dirty_ids.add(id)
        task["updated"] = time.now_utc()

        if title is not None:
            task["title"] = title
        if description is not None:
            task["description"] = description
        if due_date is not None:
            task["due_date"] = time.date_to_str(time.parse_due_date(due_date))
        if priority is not None:
            task["priority"] = priority

        if remove_description:
            task["description"] = None
        if remove_due_date:
            task["due_date"] = None

    def update_task_status(self, id: EntityId, status: TaskStatus) -> None:
        """Set a task's status; entering a done status stamps completed_at."""
        task = self.__find(id)

        self.is_dirty = True
        self._dirty_ids.add(id)

        now = time.now_utc()
        task["updated"] = now
        if is_done_status(status):
            if not is_done_status(task["status"]) or task["completed_at"] is None:
                task["completed_at"] = now
        else:
            task["completed_at"] = None
        task["status"] = status

    def list_tasks(self, filters: Optional[TaskFilters] = None) -> list[Task]:
        return [self.__with_client_name(task) for task in filter_tasks(self.tasks, filters)]

    def get_all_tasks(self) -> list[Task]:
        return deepcopy(self.tasks)

    def get_task(self, id: EntityId) -> Task:
        return self.__with_client_name(self.__find(id))


TASK_REPO = TaskRepository()
