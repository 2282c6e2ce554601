"""
Tests for due-date grouping and dashboard counts.
"""
import logging
import random

from clientdesk.service.grouping import count_tasks_by_category, group_tasks_by_due_date

BUCKETS = ("overdue", "today", "upcoming", "no_due_date", "completed")


def _ids(tasks):
    return [task["id"] for task in tasks]


def test_example_lands_in_expected_buckets(make_task, today):
    tasks = [
        make_task("today", due_in=0, priority="medium"),
        make_task("later", due_in=3, priority="high"),
        make_task("overdue", due_in=-2, priority="high"),
    ]
    groups = group_tasks_by_due_date(tasks, today)

    assert _ids(groups["overdue"]) == ["overdue"]
    assert _ids(groups["today"]) == ["today"]
    assert _ids(groups["upcoming"]) == ["later"]
    assert groups["no_due_date"] == []
    assert groups["completed"] == []


def test_completed_is_checked_before_dates(make_task, today):
    """A closed task ten days past due is completed, never overdue"""
    tasks = [
        make_task("closed", status="closed", due_in=-10),
        make_task("legacy", status="completed", due_in=-10),
        make_task("undated-closed", status="closed"),
    ]
    groups = group_tasks_by_due_date(tasks, today)

    assert _ids(groups["completed"]) == ["closed", "legacy", "undated-closed"]
    assert groups["overdue"] == []
    assert groups["no_due_date"] == []


def test_undated_and_malformed_dates_go_to_no_due_date(make_task, today, caplog):
    tasks = [
        make_task("undated"),
        make_task("bad", due_date="2026-02-30"),
    ]
    with caplog.at_level(logging.WARNING, logger="clientdesk"):
        groups = group_tasks_by_due_date(tasks, today)

    assert _ids(groups["no_due_date"]) == ["undated", "bad"]
    assert "malformed due date" in caplog.text


def test_groups_partition_the_input(make_task, today):
    """Every task appears in exactly one bucket"""
    rng = random.Random(11)
    statuses = ["todo", "in_progress", "closed", "pending", "completed"]
    for _ in range(50):
        tasks = []
        for i in range(rng.randint(0, 15)):
            due_in = rng.choice([None, -3, -1, 0, 1, 4])
            tasks.append(
                make_task(str(i), status=rng.choice(statuses), due_in=due_in)
            )
        groups = group_tasks_by_due_date(tasks, today)

        grouped_ids = [task["id"] for bucket in BUCKETS for task in groups[bucket]]
        assert sorted(grouped_ids) == sorted(_ids(tasks))
        assert len(grouped_ids) == len(set(grouped_ids))


def test_buckets_keep_input_order(make_task, today):
    tasks = [make_task("b", due_in=5), make_task("a", due_in=1)]
    assert _ids(group_tasks_by_due_date(tasks, today)["upcoming"]) == ["b", "a"]


def test_counts(make_task, today):
    tasks = [
        make_task("o1", due_in=-1),
        make_task("o2", due_in=-4, status="in_progress"),
        make_task("t", due_in=0),
        make_task("u", due_in=2),
        make_task("c", due_in=-1, status="closed"),
        make_task("n"),
    ]
    assert count_tasks_by_category(tasks, today) == {
        "overdue": 2,
        "today": 1,
        "upcoming": 1,
    }
