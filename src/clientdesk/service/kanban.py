# SPDX-License-Identifier: MIT

"""Kanban board state with optimistic moves and rollback.

The board keeps two snapshots of the task list:

- the optimistic snapshot, which is what gets rendered and which reflects
  every move as soon as it is dropped;
- the confirmed snapshot, the last known-good state of the server, which only
  changes when the server accepts a status update or when a fresh task list
  is synced in.

Each column is an explicit ordered list of task ids, so column order never
depends on how the task list happens to be concatenated.
"""

import asyncio
import itertools
import logging
from copy import deepcopy
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional, TypeAlias, TypedDict

from clientdesk.errors import TaskNotFoundError
from clientdesk.model.entity_id import EntityId
from clientdesk.model.task import TASK_STATUSES, Task, TaskStatus

logger = logging.getLogger(__name__)

StatusUpdater: TypeAlias = Callable[[EntityId, TaskStatus], Awaitable[None]]
KanbanColumns: TypeAlias = dict[TaskStatus, list[EntityId]]


class BoardSnapshot(TypedDict):
    tasks: dict[EntityId, Task]
    columns: KanbanColumns


@dataclass(frozen=True)
class PendingMove:
    version: int
    generation: int
    task_id: EntityId
    from_status: TaskStatus
    to_status: TaskStatus
    index: Optional[int]
    before_task_id: Optional[EntityId]

    @property
    def is_same_status(self) -> bool:
        return self.from_status == self.to_status


def task_set_signature(tasks: list[Task]) -> str:
    return ",".join(sorted(str(task["id"]) for task in tasks))


def empty_columns() -> KanbanColumns:
    return {status: [] for status in TASK_STATUSES}


def project_tasks(
    tasks: list[Task], previous_columns: Optional[KanbanColumns] = None
) -> BoardSnapshot:
    """
    Build a snapshot from a server task list.

    With previous_columns, tasks that stay in the same column keep their
    previous relative order; the rest follow in server order.
    """
    by_id: dict[EntityId, Task] = {}
    for task in tasks:
        if task["id"] is None:
            raise ValueError("cannot place a task without an id on the board")
        if task["status"] not in TASK_STATUSES:
            raise ValueError(f"task {task['id']} has a non-board status: {task['status']}")
        by_id[task["id"]] = deepcopy(task)

    columns = empty_columns()
    if previous_columns is not None:
        for status, task_ids in previous_columns.items():
            for task_id in task_ids:
                if task_id in by_id and by_id[task_id]["status"] == status:
                    columns[status].append(task_id)

    placed = {task_id for task_ids in columns.values() for task_id in task_ids}
    for task_id, task in by_id.items():
        if task_id not in placed:
            columns[task["status"]].append(task_id)  # type: ignore[index]

    return {"tasks": by_id, "columns": columns}


def apply_move(
    snapshot: BoardSnapshot,
    task_id: EntityId,
    status: TaskStatus,
    index: Optional[int] = None,
) -> BoardSnapshot:
    """
    Return a new snapshot with a task moved to a column position.

    index is the visual drop position, "insert before the card at index". For
    a move further down the same column the index is shifted by one, because
    taking the card out first moves every card after it up by one.
    """
    if task_id not in snapshot["tasks"]:
        raise TaskNotFoundError(task_id)
    if status not in TASK_STATUSES:
        raise ValueError(f"unknown kanban column: {status}")

    tasks = dict(snapshot["tasks"])
    columns: KanbanColumns = {
        column: list(task_ids) for column, task_ids in snapshot["columns"].items()
    }

    task = tasks[task_id]
    from_status: TaskStatus = task["status"]  # type: ignore[assignment]
    is_same_status = from_status == status

    updated_task = task if is_same_status else {**task, "status": status}
    tasks[task_id] = updated_task  # type: ignore[assignment]

    original_index = columns[from_status].index(task_id)
    columns[from_status].remove(task_id)

    target = columns[status]
    insert_index = len(target) if index is None else index
    if is_same_status and index is not None and index > original_index:
        insert_index -= 1
    insert_index = max(0, min(insert_index, len(target)))
    target.insert(insert_index, task_id)

    return {"tasks": tasks, "columns": columns}


def index_before(
    snapshot: BoardSnapshot, status: TaskStatus, before_task_id: Optional[EntityId]
) -> Optional[int]:
    """Drop index that puts a card right above before_task_id, None for the end."""
    column = snapshot["columns"][status]
    if before_task_id is None or before_task_id not in column:
        return None
    return column.index(before_task_id)


class KanbanBoard:
    def __init__(
        self,
        update_status: StatusUpdater,
        highlight_seconds: float = 0.6,
    ) -> None:
        self._update_status = update_status
        self.highlight_seconds = highlight_seconds

        self._synced_signature: Optional[str] = None
        self._generation = 0
        self._versions = itertools.count(1)
        self._confirmed: BoardSnapshot = {"tasks": {}, "columns": empty_columns()}
        self._optimistic: BoardSnapshot = {"tasks": {}, "columns": empty_columns()}
        self._pending: list[PendingMove] = []

        self.just_dropped_task_id: Optional[EntityId] = None
        self.updating_task_ids: set[EntityId] = set()

    # Reading

    def columns(self) -> dict[TaskStatus, list[Task]]:
        return {
            status: [self._optimistic["tasks"][task_id] for task_id in task_ids]
            for status, task_ids in self._optimistic["columns"].items()
        }

    def column(self, status: TaskStatus) -> list[Task]:
        if status not in TASK_STATUSES:
            raise ValueError(f"unknown kanban column: {status}")
        return [
            self._optimistic["tasks"][task_id]
            for task_id in self._optimistic["columns"][status]
        ]

    @property
    def tasks(self) -> list[Task]:
        return [task for status in TASK_STATUSES for task in self.column(status)]

    @property
    def confirmed_tasks(self) -> list[Task]:
        return [
            self._confirmed["tasks"][task_id]
            for status in TASK_STATUSES
            for task_id in self._confirmed["columns"][status]
        ]

    @property
    def pending_moves(self) -> list[PendingMove]:
        return list(self._pending)

    # Syncing

    def sync(self, tasks: list[Task]) -> bool:
        """
        Take in the server's task list.

        Both snapshots are replaced and pending moves dropped only when the
        set of task ids changed. Otherwise the confirmed snapshot is refreshed
        in its current column order and the pending moves are replayed on top
        of it, so a background refetch does not clobber local reordering.

        Returns True when the board was rebuilt.
        """
        signature = task_set_signature(tasks)
        if signature != self._synced_signature:
            self._synced_signature = signature
            self._generation += 1
            self._pending.clear()
            self._confirmed = project_tasks(tasks)
            self._optimistic = deepcopy(self._confirmed)
            logger.debug("board rebuilt from %d tasks", len(tasks))
            return True

        self._confirmed = project_tasks(tasks, self._confirmed["columns"])
        self._optimistic = self._replay(deepcopy(self._confirmed))
        return False

    # Moving

    def drop(
        self, task_id: EntityId, status: TaskStatus, index: Optional[int] = None
    ) -> PendingMove:
        """
        Apply a drag-and-drop move to the rendered state right away.

        Moves within a column only change display order and are never sent to
        the server. They are folded into the confirmed snapshot right away
        when it already has the task in that column; otherwise they wait in
        the pending list until the task's status change resolves.
        """
        if task_id not in self._optimistic["tasks"]:
            raise TaskNotFoundError(task_id)

        from_status: TaskStatus = self._optimistic["tasks"][task_id]["status"]  # type: ignore[assignment]
        self._optimistic = apply_move(self._optimistic, task_id, status, index)

        target = self._optimistic["columns"][status]
        position = target.index(task_id)
        move = PendingMove(
            version=next(self._versions),
            generation=self._generation,
            task_id=task_id,
            from_status=from_status,
            to_status=status,
            index=index,
            before_task_id=target[position + 1] if position + 1 < len(target) else None,
        )

        if move.is_same_status and self._is_settled(task_id, status):
            self._apply_to_confirmed(move)
        else:
            self._pending.append(move)
        return move

    async def move_task(
        self, task_id: EntityId, status: TaskStatus, index: Optional[int] = None
    ) -> bool:
        """
        Move a task and, if it changed column, persist the new status.

        Returns False when the server rejected the update and the board was
        rolled back.
        """
        move = self.drop(task_id, status, index)
        self._highlight(task_id)

        if move.is_same_status:
            return True
        return await self._persist(move)

    async def _persist(self, move: PendingMove) -> bool:
        self.updating_task_ids.add(move.task_id)
        try:
            await self._update_status(move.task_id, move.to_status)
        except Exception as e:
            logger.error(
                "failed to move task %s to %s: %s", move.task_id, move.to_status, e
            )
            self._rollback(move)
            return False
        finally:
            self.updating_task_ids.discard(move.task_id)

        self._confirm(move)
        return True

    def _is_stale(self, move: PendingMove) -> bool:
        if move.generation != self._generation:
            logger.debug(
                "ignoring result of move %d for task %s issued before a resync",
                move.version,
                move.task_id,
            )
            return True
        return False

    def _confirm(self, move: PendingMove) -> None:
        if self._is_stale(move):
            return
        self._pending = [p for p in self._pending if p.version != move.version]
        self._apply_to_confirmed(move)
        self._settle_reorders()

    def _rollback(self, move: PendingMove) -> None:
        if self._is_stale(move):
            return
        self._pending = [p for p in self._pending if p.version != move.version]
        self._settle_reorders()

        # Rebuild from the last known-good state and replay the moves that are
        # still in flight so unrelated moves are not lost
        self._optimistic = self._replay(deepcopy(self._confirmed))
        logger.warning(
            "rolled back move of task %s to %s, %d move(s) still pending",
            move.task_id,
            move.to_status,
            len(self._pending),
        )

    def _is_settled(self, task_id: EntityId, status: TaskStatus) -> bool:
        confirmed_task = self._confirmed["tasks"].get(task_id)
        return (
            confirmed_task is not None
            and confirmed_task["status"] == status
            and all(pending.task_id != task_id for pending in self._pending)
        )

    def _settle_reorders(self) -> None:
        """
        Resolve queued same-column moves whose task has no status change left
        in flight: fold them into the confirmed snapshot when the task is
        confirmed in that column, discard them when it is not.
        """
        remaining: list[PendingMove] = []
        for pending in self._pending:
            blocked = any(
                other.task_id == pending.task_id and not other.is_same_status
                for other in remaining
            )
            if not pending.is_same_status or blocked:
                remaining.append(pending)
                continue
            confirmed_task = self._confirmed["tasks"].get(pending.task_id)
            if confirmed_task is not None and confirmed_task["status"] == pending.to_status:
                self._apply_to_confirmed(pending)
            else:
                logger.debug(
                    "dropping reorder of task %s, it is no longer in %s",
                    pending.task_id,
                    pending.to_status,
                )
        self._pending = remaining

    def _replay(self, snapshot: BoardSnapshot) -> BoardSnapshot:
        for pending in self._pending:
            task = snapshot["tasks"].get(pending.task_id)
            if task is None:
                continue
            # A reorder never moves a task between columns
            if pending.is_same_status and task["status"] != pending.to_status:
                continue
            snapshot = self._place(snapshot, pending)
        return snapshot

    def _apply_to_confirmed(self, move: PendingMove) -> None:
        if move.task_id in self._confirmed["tasks"]:
            self._confirmed = self._place(self._confirmed, move)

    def _place(self, snapshot: BoardSnapshot, move: PendingMove) -> BoardSnapshot:
        # Positions are taken relative to the card the task was dropped above,
        # since column contents differ between snapshots
        index = index_before(snapshot, move.to_status, move.before_task_id)
        return apply_move(snapshot, move.task_id, move.to_status, index)

    # Highlight

    def _highlight(self, task_id: EntityId) -> None:
        self.just_dropped_task_id = task_id
        loop = asyncio.get_running_loop()
        loop.call_later(self.highlight_seconds, self._clear_highlight, task_id)

    def _clear_highlight(self, task_id: EntityId) -> None:
        if self.just_dropped_task_id == task_id:
            self.just_dropped_task_id = None
