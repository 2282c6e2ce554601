"""
Tests for the command line: task, client and config commands end to end.
"""
import pytest
from typer.testing import CliRunner

from clientdesk.repository.client import CLIENT_REPO
from clientdesk.repository.configuration import CONFIGURATION_REPO
from clientdesk.repository.task import TASK_REPO
from clientdesk.terminal.app import app
from clientdesk.time import today_local

runner = CliRunner()


def _invoke(*args):
    return runner.invoke(app, list(args))


def _only_task():
    tasks = TASK_REPO.get_all_tasks()
    assert len(tasks) == 1
    return tasks[0]


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Tasks
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


def test_add_task_for_client():
    result = _invoke("client", "add", "Ada", "--email", "ada@example.com")
    assert result.exit_code == 0, result.output

    result = _invoke("task", "add", "Call", "--client", "1", "--due=0", "--priority", "high")
    assert result.exit_code == 0, result.output
    assert "Call" in result.output

    task = _only_task()
    assert task["client_id"] == CLIENT_REPO.get_all_clients()[0]["id"]
    assert task["due_date"] == today_local().to_date_string()
    assert task["priority"] == "high"
    assert task["status"] == "todo"


def test_command_aliases():
    assert _invoke("t", "a", "Call").exit_code == 0
    result = _invoke("t", "ls")
    assert result.exit_code == 0, result.output
    assert "Call" in result.output


def test_list_shows_counts_and_groups():
    _invoke("task", "add", "Late", "--due=-1")
    _invoke("task", "add", "Now", "--due", "today")
    _invoke("task", "add", "Soon", "--due=3")
    _invoke("task", "add", "Someday")

    result = _invoke("task", "list")
    assert result.exit_code == 0, result.output
    assert "1 overdue" in result.output
    assert "1 due today" in result.output
    assert "1 upcoming" in result.output
    assert "No due date" in result.output


def test_list_with_filters_and_nothing_matching():
    _invoke("task", "add", "Call", "--priority", "low")
    result = _invoke("task", "list", "--priority", "high")
    assert result.exit_code == 0, result.output
    assert "No tasks match your current filters." in result.output


def test_urgent_orders_by_due_date_then_priority():
    _invoke("task", "add", "Cello", "--due=3", "--priority", "high")
    _invoke("task", "add", "Xylophone", "--due=-2", "--priority", "high")
    _invoke("task", "add", "Marimba", "--due=0", "--priority", "medium")

    result = _invoke("task", "urgent")
    assert result.exit_code == 0, result.output
    output = result.output
    assert output.index("Xylophone") < output.index("Marimba") < output.index("Cello")


def test_modify_task():
    _invoke("task", "add", "Call", "--due=2", "--description", "ring twice")
    result = _invoke("task", "modify", "1", "--title", "Email", "--remove-due", "-rd")
    assert result.exit_code == 0, result.output

    task = _only_task()
    assert task["title"] == "Email"
    assert task["due_date"] is None
    assert task["description"] is None


def test_move_changes_status():
    _invoke("task", "add", "Call")

    result = _invoke("task", "move", "1", "closed")
    assert result.exit_code == 0, result.output
    assert "Closed" in result.output

    task = _only_task()
    assert task["status"] == "closed"
    assert task["completed_at"] is not None


def test_failed_move_exits_with_error(monkeypatch):
    _invoke("task", "add", "Call")

    def reject(task_id, status):
        raise RuntimeError("storage unavailable")

    monkeypatch.setattr(TASK_REPO, "update_task_status", reject)

    result = _invoke("task", "move", "1", "in_progress")
    assert result.exit_code == 1
    assert "Move failed" in result.output
    assert _only_task()["status"] == "todo"


def test_board_shows_all_columns():
    _invoke("task", "add", "Call", "--status", "in_progress")
    result = _invoke("task", "board")
    assert result.exit_code == 0, result.output
    for title in ("To Do", "In Progress", "Closed", "Call"):
        assert title in result.output


def test_unknown_task_id_is_reported():
    result = _invoke("task", "show", "99")
    assert result.exit_code == 1
    assert "task not found: 99" in result.output


@pytest.mark.parametrize(
    "args",
    [
        ("task", "add", "Call", "--priority", "urgent"),
        ("task", "add", "Call", "--due", "someday"),
        ("task", "add", "Call", "--due", "2026-02-30"),
        ("task", "list", "--status", "done"),
        ("task", "move", "1", "archived"),
    ],
)
def test_bad_parameters(args):
    result = _invoke(*args)
    assert result.exit_code == 2
    assert TASK_REPO.get_all_tasks() == []


def test_no_header_option():
    assert "clientdesk" in _invoke("task", "list").output
    assert "clientdesk" not in _invoke("--no-header", "task", "list").output


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Clients
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


CSV_TEXT = (
    "Name,Email,Phone,Birthday,Address,Tags\n"
    "Ada,ada@example.com,5551234567,1990-12-10,,VIP\n"
    "Bad,not-an-email,,,,\n"
    "Grace,grace@example.com,,,,\n"
)


def test_add_client_validates_fields():
    result = _invoke("client", "add", "Ada", "--email", "nope")
    assert result.exit_code == 1
    assert "Invalid email format" in result.output
    assert CLIENT_REPO.get_all_clients() == []


def test_add_client_normalises_phone_and_tags():
    result = _invoke(
        "client", "add", "Ada", "-e", "ada@example.com", "-p", "(555) 123-4567", "-t", "VIP", "-t", "Buyer"
    )
    assert result.exit_code == 0, result.output
    client = CLIENT_REPO.get_all_clients()[0]
    assert client["phone"] == "+1-555-123-4567"
    assert client["tags"] == ["VIP", "Buyer"]

    duplicate = _invoke("client", "add", "Ada 2", "-e", "ADA@example.com")
    assert duplicate.exit_code == 1
    assert "already exists" in duplicate.output


def test_import_valid_rows(tmp_path):
    path = tmp_path / "clients.csv"
    path.write_text(CSV_TEXT)

    result = _invoke("client", "import", str(path))
    assert result.exit_code == 0, result.output
    assert "2 imported" in result.output
    assert "Invalid email format" in result.output
    assert [client["name"] for client in CLIENT_REPO.get_all_clients()] == ["Ada", "Grace"]

    listing = _invoke("client", "list")
    assert "grace@example.com" in listing.output


def test_import_dry_run_imports_nothing(tmp_path):
    path = tmp_path / "clients.csv"
    path.write_text(CSV_TEXT)

    result = _invoke("client", "import", str(path), "--dry-run")
    assert result.exit_code == 0, result.output
    assert "3 row(s)" in result.output
    assert CLIENT_REPO.get_all_clients() == []


def test_import_over_the_row_cap_is_rejected(tmp_path):
    path = tmp_path / "clients.csv"
    path.write_text(CSV_TEXT)

    assert _invoke("config", "set", "--max-import-rows", "2").exit_code == 0
    result = _invoke("client", "import", str(path))
    assert result.exit_code == 1
    assert "Maximum is 2 rows" in result.output
    assert CLIENT_REPO.get_all_clients() == []


def test_import_with_no_valid_rows(tmp_path):
    path = tmp_path / "clients.csv"
    path.write_text("Name,Email\n,missing-name@example.com\n")

    result = _invoke("client", "import", str(path))
    assert result.exit_code == 1
    assert "No valid rows to import." in result.output


def test_template_command(tmp_path):
    path = tmp_path / "template.csv"
    result = _invoke("client", "template", str(path))
    assert result.exit_code == 0, result.output
    assert path.read_text().startswith("Name,Email,Phone,Birthday,Address,Tags")


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Configuration
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


def test_config_view_and_set():
    result = _invoke("c", "v")
    assert result.exit_code == 0, result.output
    assert "highlight_seconds" in result.output

    result = _invoke("config", "set", "--highlight-seconds", "0.2", "--log-level", "info")
    assert result.exit_code == 0, result.output
    config = CONFIGURATION_REPO.get_config()
    assert config["highlight_seconds"] == 0.2
    assert config["log_level"] == "INFO"

    assert _invoke("config", "set", "--highlight-seconds", "0").exit_code == 2
    assert _invoke("config", "set", "--log-level", "loud").exit_code == 2
