# SPDX-License-Identifier: MIT

import asyncio
import logging
from typing import Annotated, Optional, cast

import pendulum
import typer
from rich.console import Console

from clientdesk import configuration
from clientdesk.id_map import clear_id_map_if_required, resolve_client_id, resolve_task_id
from clientdesk.model.entity_id import EntityId
from clientdesk.model.task import (
    TASK_STATUSES,
    Task,
    TaskFilters,
    TaskPriority,
    TaskStatus,
    is_done_status,
)
from clientdesk.query.sort import sort_tasks_by_urgency
from clientdesk.repository.client import CLIENT_REPO
from clientdesk.repository.configuration import CONFIGURATION_REPO
from clientdesk.repository.task import TASK_REPO
from clientdesk.service.grouping import count_tasks_by_category, group_tasks_by_due_date
from clientdesk.service.kanban import KanbanBoard
from clientdesk.template.task import get_task_template
from clientdesk.terminal.custom_typer import AliasedTyperGroup
from clientdesk.terminal.parse import parse_date
from clientdesk.terminal.validate import (
    validate_priority,
    validate_priority_filter,
    validate_status,
    validate_status_filter,
)
from clientdesk.time import date_to_str
from clientdesk.view.view.views import kanban as kanban_report
from clientdesk.view.view.views import task as task_report

logger = logging.getLogger(__name__)

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)

DATE_HELP = "valid inputs: YYYY-MM-DD, today, yesterday, tomorrow, or day offset like 1, -1"


@app.command("add, a", no_args_is_help=True)
def add(
    title: str,
    client_id: Annotated[
        Optional[int], typer.Option("--client", "-c", help="client id as listed")
    ] = None,
    description: Annotated[Optional[str], typer.Option("--description", "-d")] = None,
    due: Annotated[
        Optional[pendulum.Date],
        typer.Option("--due", "-u", parser=parse_date, help=DATE_HELP),
    ] = None,
    priority: Annotated[
        Optional[str],
        typer.Option(
            "--priority",
            "-p",
            callback=validate_priority,
            help="valid input: low, medium, high",
        ),
    ] = None,
    status: Annotated[
        Optional[str],
        typer.Option(
            "--status",
            "-s",
            callback=validate_status,
            help="valid input: todo, in_progress, closed",
        ),
    ] = None,
) -> None:
    task = get_task_template()
    task["title"] = title
    task["description"] = description
    task["due_date"] = date_to_str(due) if due is not None else None
    if priority is not None:
        task["priority"] = cast(TaskPriority, priority)
    if status is not None:
        task["status"] = cast(TaskStatus, status)
    if client_id is not None:
        real_client_id = resolve_client_id(client_id)
        CLIENT_REPO.get_client(real_client_id)
        task["client_id"] = real_client_id

    id = TASK_REPO.save_new_task(task)
    logger.info("added task %s", id)

    task_report.single_task_view(TASK_REPO.get_task(id))


@app.command("modify, m", no_args_is_help=True)
def modify(
    id: int,
    title: Annotated[Optional[str], typer.Option("--title", "-ti")] = None,
    description: Annotated[Optional[str], typer.Option("--description", "-d")] = None,
    due: Annotated[
        Optional[pendulum.Date],
        typer.Option("--due", "-u", parser=parse_date, help=DATE_HELP),
    ] = None,
    priority: Annotated[
        Optional[str],
        typer.Option(
            "--priority",
            "-p",
            callback=validate_priority,
            help="valid input: low, medium, high",
        ),
    ] = None,
    remove_description: Annotated[
        bool, typer.Option("--remove-description", "-rd")
    ] = False,
    remove_due: Annotated[bool, typer.Option("--remove-due", "-ru")] = False,
) -> None:
    real_id: EntityId = resolve_task_id(id)

    TASK_REPO.modify_task(
        real_id,
        title=title,
        description=description,
        due_date=date_to_str(due) if due is not None else None,
        priority=cast(Optional[TaskPriority], priority),
        remove_description=remove_description,
        remove_due_date=remove_due,
    )

    task_report.single_task_view(TASK_REPO.get_task(real_id))


@app.command("show, s", no_args_is_help=True)
def show(id: int) -> None:
    task_report.single_task_view(TASK_REPO.get_task(resolve_task_id(id)))


@app.command("list, ls")
def list_tasks(
    status: Annotated[
        Optional[str],
        typer.Option(
            "--status",
            "-s",
            callback=validate_status_filter,
            help="valid input: todo, in_progress, closed, all",
        ),
    ] = None,
    priority: Annotated[
        Optional[str],
        typer.Option(
            "--priority",
            "-p",
            callback=validate_priority_filter,
            help="valid input: low, medium, high, all",
        ),
    ] = None,
    due_before: Annotated[
        Optional[pendulum.Date],
        typer.Option("--due-before", "-db", parser=parse_date, help=DATE_HELP),
    ] = None,
    due_after: Annotated[
        Optional[pendulum.Date],
        typer.Option("--due-after", "-da", parser=parse_date, help=DATE_HELP),
    ] = None,
    hide_completed: Annotated[
        bool, typer.Option("--hide-completed", "-hc")
    ] = False,
) -> None:
    """Tasks grouped by due date: overdue, today, upcoming, undated, completed."""
    clear_id_map_if_required()

    filters: TaskFilters = {}
    if status is not None:
        filters["status"] = cast(TaskStatus, status)
    if priority is not None:
        filters["priority"] = cast(TaskPriority, priority)
    if due_before is not None:
        filters["due_before"] = date_to_str(due_before)
    if due_after is not None:
        filters["due_after"] = date_to_str(due_after)

    tasks = TASK_REPO.list_tasks(filters)
    groups = group_tasks_by_due_date(tasks)
    counts = count_tasks_by_category(tasks)

    task_report.grouped_tasks_view(groups, counts, show_completed=not hide_completed)


@app.command("urgent, u")
def urgent(
    include_completed: Annotated[
        bool, typer.Option("--include-completed", "-ic")
    ] = False,
) -> None:
    """Open tasks ordered by due date, then by priority."""
    clear_id_map_if_required()

    tasks = TASK_REPO.list_tasks()
    if not include_completed:
        tasks = [task for task in tasks if not is_done_status(task["status"])]

    task_report.tasks_view(
        "urgent",
        sort_tasks_by_urgency(tasks),
        columns=["id", "state", "due", "priority", "title", "client", "status"],
    )


def __board_tasks() -> list[Task]:
    tasks = TASK_REPO.list_tasks()
    board_tasks = [task for task in tasks if task["status"] in TASK_STATUSES]
    if len(board_tasks) != len(tasks):
        logger.warning(
            "%d task(s) with a legacy status are not shown on the board",
            len(tasks) - len(board_tasks),
        )
    return board_tasks


def __new_board() -> KanbanBoard:
    config = CONFIGURATION_REPO.get_config()

    async def update_status(task_id: EntityId, status: TaskStatus) -> None:
        TASK_REPO.update_task_status(task_id, status)

    board = KanbanBoard(
        update_status,
        highlight_seconds=config.get(
            "highlight_seconds", configuration.DEFAULT_HIGHLIGHT_SECONDS
        ),
    )
    board.sync(__board_tasks())
    return board


@app.command("board, b")
def board() -> None:
    """Tasks in todo, in progress and closed columns."""
    clear_id_map_if_required()

    kanban_board = __new_board()
    kanban_report.kanban_view(kanban_board.columns())


async def __move(
    task_id: EntityId, status: TaskStatus, index: Optional[int]
) -> bool:
    kanban_board = __new_board()
    moved = await kanban_board.move_task(task_id, status, index)
    kanban_report.kanban_view(
        kanban_board.columns(),
        just_dropped_task_id=kanban_board.just_dropped_task_id,
        updating_task_ids=kanban_board.updating_task_ids,
    )
    return moved


@app.command("move, mv", no_args_is_help=True)
def move(
    id: int,
    status: Annotated[
        str,
        typer.Argument(
            callback=validate_status, help="valid input: todo, in_progress, closed"
        ),
    ],
    index: Annotated[
        Optional[int],
        typer.Option(
            "--index",
            "-i",
            min=0,
            help="position in the column, 0 is the top; defaults to the bottom",
        ),
    ] = None,
) -> None:
    """
    Move a task to a board column.

    Changing column updates the task status. Moving within a column only
    changes the order shown by this command; it is not saved.
    """
    real_id = resolve_task_id(id)
    TASK_REPO.get_task(real_id)

    moved = asyncio.run(__move(real_id, cast(TaskStatus, status), index))
    if not moved:
        console = Console(stderr=True)
        console.print("[bold red]Move failed, the board was restored.[/bold red]")
        raise typer.Exit(code=1)
