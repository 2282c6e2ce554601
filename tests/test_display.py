"""
Tests for per-task display info and card labels.
"""
import pytest

from clientdesk.errors import InvalidDueDateError
from clientdesk.service.display import (
    format_due_date,
    format_relative_days,
    get_priority_color,
    get_priority_label,
    get_status_color,
    get_status_label,
    get_task_display_info,
)


@pytest.mark.parametrize("days", [-1, -2, -30])
@pytest.mark.parametrize("status", ["todo", "in_progress", "pending"])
def test_open_past_due_tasks_are_overdue(make_task, today, days, status):
    info = get_task_display_info(make_task("a", status=status, due_in=days), today)
    assert info["is_overdue"]
    assert info["days_until_due"] == days


@pytest.mark.parametrize("days", [-10, -1, 0, 3])
@pytest.mark.parametrize("status", ["closed", "completed"])
def test_done_tasks_are_never_overdue(make_task, today, days, status):
    info = get_task_display_info(make_task("a", status=status, due_in=days), today)
    assert not info["is_overdue"]


def test_due_today_and_tomorrow(make_task, today):
    due_today = get_task_display_info(make_task("a", due_in=0), today)
    assert due_today["is_due_today"]
    assert not due_today["is_due_tomorrow"]
    assert not due_today["is_overdue"]
    assert due_today["days_until_due"] == 0

    due_tomorrow = get_task_display_info(make_task("b", due_in=1), today)
    assert due_tomorrow["is_due_tomorrow"]
    assert not due_tomorrow["is_due_today"]


def test_undated_task_has_no_day_count(make_task, today):
    info = get_task_display_info(make_task("a", priority="high"), today)
    assert info["days_until_due"] is None
    assert not info["is_overdue"]
    assert info["priority_color"] == "error"
    assert info["status_color"] == "default"


def test_malformed_due_date_raises(make_task, today):
    with pytest.raises(InvalidDueDateError):
        get_task_display_info(make_task("a", due_date="31/12/2026"), today)


def test_format_due_date(make_task, today):
    assert format_due_date(make_task("a", due_in=-2), today) == "Overdue (2 days ago)"
    assert format_due_date(make_task("a", due_in=0), today) == "Today"
    assert format_due_date(make_task("a", due_in=1), today) == "Tomorrow"
    assert format_due_date(make_task("a", due_in=5), today) == "in 5 days"
    assert format_due_date(make_task("a", due_date="2026-11-30"), today) == "Nov 30, 2026"
    assert format_due_date(make_task("a"), today) == "No due date"


def test_format_due_date_for_closed_past_task(make_task, today):
    task = make_task("a", status="closed", due_in=-1)
    assert format_due_date(task, today) == "yesterday"


def test_format_relative_days():
    assert format_relative_days(0) == "today"
    assert format_relative_days(1) == "tomorrow"
    assert format_relative_days(-1) == "yesterday"
    assert format_relative_days(4) == "in 4 days"
    assert format_relative_days(-4) == "4 days ago"


def test_colors_and_labels():
    assert get_priority_color("high") == "error"
    assert get_priority_color("medium") == "warning"
    assert get_priority_color("low") == "success"
    assert get_priority_color("other") == "default"

    assert get_status_color("closed") == "success"
    assert get_status_color("completed") == "success"
    assert get_status_color("in_progress") == "primary"
    assert get_status_color("todo") == "default"

    assert get_priority_label("medium") == "Medium Priority"
    assert get_status_label("in_progress") == "In Progress"
    assert get_status_label("todo") == "To Do"
    assert get_status_label("nope") == "Unknown"
