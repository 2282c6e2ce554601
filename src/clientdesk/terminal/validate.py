# SPDX-License-Identifier: MIT

from typing import Optional

import typer

from clientdesk.model.task import TASK_PRIORITIES, TASK_STATUSES


def validate_status(status: Optional[str]) -> Optional[str]:
    if status is None:
        return None
    if status not in TASK_STATUSES:
        raise typer.BadParameter(f"Status must be one of: {', '.join(TASK_STATUSES)}")
    return status


def validate_status_filter(status: Optional[str]) -> Optional[str]:
    if status is None or status == "all":
        return status
    return validate_status(status)


def validate_priority(priority: Optional[str]) -> Optional[str]:
    if priority is None:
        return None
    if priority not in TASK_PRIORITIES:
        raise typer.BadParameter(
            f"Priority must be one of: {', '.join(TASK_PRIORITIES)}"
        )
    return priority


def validate_priority_filter(priority: Optional[str]) -> Optional[str]:
    if priority is None or priority == "all":
        return priority
    return validate_priority(priority)


def validate_positive(value: Optional[float]) -> Optional[float]:
    if value is None:
        return None
    if value <= 0:
        raise typer.BadParameter("Value must be greater than 0")
    return value


def validate_log_level(level: Optional[str]) -> Optional[str]:
    if level is None:
        return None
    if level.upper() not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
        raise typer.BadParameter(
            "Log level must be one of: DEBUG, INFO, WARNING, ERROR, CRITICAL"
        )
    return level.upper()
