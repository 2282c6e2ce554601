"""
Tests for the YAML-backed repositories, the id map and configuration.
"""
from pathlib import Path

import pendulum
import pytest
from yaml import dump

from clientdesk import configuration
from clientdesk.cleanup import flush_and_sync
from clientdesk.errors import (
    ClientNotFoundError,
    InvalidDueDateError,
    TaskNotFoundError,
)
from clientdesk.id_map import clear_id_map_if_required, resolve_client_id, resolve_task_id
from clientdesk.repository.client import CLIENT_REPO
from clientdesk.repository.configuration import CONFIGURATION_REPO
from clientdesk.repository.id_map import ID_MAP_REPO
from clientdesk.repository.task import TASK_REPO
from clientdesk.template.client import get_client_template
from clientdesk.template.task import get_task_template


def _new_task(title="Call back", **fields):
    task = get_task_template()
    task["title"] = title
    task.update(fields)
    return TASK_REPO.save_new_task(task)


def _new_client(name="Ada", email="ada@example.com", **fields):
    client = get_client_template()
    client["name"] = name
    client["email"] = email
    client.update(fields)
    return CLIENT_REPO.save_new_client(client)


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Tasks
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


def test_new_task_defaults():
    task = TASK_REPO.get_task(_new_task())
    assert task["status"] == "todo"
    assert task["priority"] == "medium"
    assert task["due_date"] is None
    assert task["completed_at"] is None


def test_tasks_survive_flush_and_reload(workspace):
    id = _new_task(due_date="2026-10-20", priority="high", description="notes")
    assert TASK_REPO.flush() is True
    assert (workspace / "tasks" / f"{id}.yaml").is_file()

    TASK_REPO.reset()
    task = TASK_REPO.get_task(id)
    assert task["title"] == "Call back"
    assert task["due_date"] == "2026-10-20"
    assert task["priority"] == "high"
    assert task["description"] == "notes"
    assert isinstance(task["created"], pendulum.DateTime)


def test_flush_without_changes_writes_nothing():
    TASK_REPO.get_all_tasks()
    assert TASK_REPO.flush() is False


def test_malformed_due_date_is_refused():
    with pytest.raises(InvalidDueDateError):
        _new_task(due_date="2026-02-30")


def test_status_changes_stamp_completed_at():
    id = _new_task()

    TASK_REPO.update_task_status(id, "closed")
    completed_at = TASK_REPO.get_task(id)["completed_at"]
    assert completed_at is not None

    TASK_REPO.update_task_status(id, "closed")
    assert TASK_REPO.get_task(id)["completed_at"] == completed_at

    TASK_REPO.update_task_status(id, "in_progress")
    task = TASK_REPO.get_task(id)
    assert task["status"] == "in_progress"
    assert task["completed_at"] is None


def test_saving_a_closed_task_stamps_completed_at():
    id = _new_task(status="closed")
    assert TASK_REPO.get_task(id)["completed_at"] is not None


def test_modify_task():
    id = _new_task(due_date="2026-10-20", description="old")

    TASK_REPO.modify_task(id, title="New title", priority="low", remove_description=True)
    task = TASK_REPO.get_task(id)
    assert task["title"] == "New title"
    assert task["priority"] == "low"
    assert task["description"] is None
    assert task["due_date"] == "2026-10-20"

    TASK_REPO.modify_task(id, remove_due_date=True)
    assert TASK_REPO.get_task(id)["due_date"] is None


def test_unknown_task():
    with pytest.raises(TaskNotFoundError) as excinfo:
        TASK_REPO.get_task("missing")
    assert isinstance(excinfo.value, KeyError)
    assert str(excinfo.value) == "task not found: missing"

    with pytest.raises(TaskNotFoundError):
        TASK_REPO.update_task_status("missing", "closed")


def test_list_tasks_filters_and_attaches_client_name():
    client_id = _new_client()
    _new_task("With client", client_id=client_id, priority="high")
    _new_task("Without client", priority="low")

    tasks = TASK_REPO.list_tasks({"priority": "high"})
    assert [task["title"] for task in tasks] == ["With client"]
    assert tasks[0]["client_name"] == "Ada"

    all_tasks = TASK_REPO.list_tasks()
    assert [task.get("client_name") for task in all_tasks] == ["Ada", None]


def test_returned_tasks_are_copies():
    id = _new_task()
    TASK_REPO.get_task(id)["title"] = "changed"
    assert TASK_REPO.get_task(id)["title"] == "Call back"


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Clients
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


def test_client_save_and_lookup(workspace):
    id = _new_client(tags=["VIP", "Buyer", "VIP"])
    assert CLIENT_REPO.get_client(id)["tags"] == ["VIP", "Buyer"]
    assert CLIENT_REPO.find_by_email(" ADA@example.com")["id"] == id
    assert CLIENT_REPO.find_by_email("grace@example.com") is None

    CLIENT_REPO.flush()
    CLIENT_REPO.reset()
    assert CLIENT_REPO.get_client_name(id) == "Ada"
    assert (workspace / "clients" / f"{id}.yaml").is_file()


def test_unknown_client():
    with pytest.raises(ClientNotFoundError):
        CLIENT_REPO.get_client("missing")
    assert CLIENT_REPO.get_client_name("missing") is None


def test_import_reports_existing_emails_per_row():
    _new_client(email="taken@example.com")

    result = CLIENT_REPO.import_clients(
        {
            "clients": [
                {"name": "Grace", "email": "grace@example.com", "tags": ["Seller"]},
                {"name": "Again", "email": "Taken@example.com"},
                {"name": "Alan", "email": "alan@example.com", "phone": "+1-555-123-4567"},
            ]
        }
    )

    assert result["imported"] == 2
    assert result["failed"] == 1
    assert result["errors"] == [
        {"row": 2, "error": "A client with email Taken@example.com already exists"}
    ]
    names = [client["name"] for client in CLIENT_REPO.get_all_clients()]
    assert names == ["Ada", "Grace", "Alan"]


def test_import_rejects_duplicates_within_the_request():
    result = CLIENT_REPO.import_clients(
        {
            "clients": [
                {"name": "Grace", "email": "grace@example.com"},
                {"name": "Grace again", "email": "grace@example.com"},
            ]
        }
    )
    assert result["imported"] == 1
    assert result["failed"] == 1


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Id map
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


def test_synthetic_ids_are_stable_until_cleared():
    assert ID_MAP_REPO.associate_id("tasks", "uuid-a") == 1
    assert ID_MAP_REPO.associate_id("tasks", "uuid-b") == 2
    assert ID_MAP_REPO.associate_id("tasks", "uuid-a") == 1
    assert ID_MAP_REPO.associate_id("clients", "uuid-c") == 1
    assert ID_MAP_REPO.get_real_id("tasks", 2) == "uuid-b"

    clear_id_map_if_required()
    assert ID_MAP_REPO.associate_id("tasks", "uuid-b") == 1


def test_id_map_survives_flush_and_reload():
    ID_MAP_REPO.associate_id("tasks", "uuid-a")
    ID_MAP_REPO.flush()
    ID_MAP_REPO.reset()
    assert ID_MAP_REPO.get_real_id("tasks", 1) == "uuid-a"


def test_unknown_entity_type_and_ids():
    with pytest.raises(TypeError):
        ID_MAP_REPO.associate_id("projects", "x")
    with pytest.raises(TaskNotFoundError):
        resolve_task_id(7)
    with pytest.raises(ClientNotFoundError):
        resolve_client_id(7)


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Configuration
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


def test_defaults_are_written_on_initialize():
    config = CONFIGURATION_REPO.get_config()
    assert config == configuration.get_default_configuration()


def test_missing_settings_are_filled_in():
    configuration.APP_CONFIG_PATH.write_text(
        dump({"data_path": None, "show_header": False, "clear_ids_on_view": True})
    )
    CONFIGURATION_REPO.reset()

    config = CONFIGURATION_REPO.get_config()
    assert config["show_header"] is False
    assert config["highlight_seconds"] == configuration.DEFAULT_HIGHLIGHT_SECONDS
    assert config["max_import_rows"] == configuration.DEFAULT_MAX_IMPORT_ROWS
    assert CONFIGURATION_REPO.is_dirty


def test_update_config():
    CONFIGURATION_REPO.update_config(
        highlight_seconds=1.5, max_import_rows=20, log_level="debug"
    )
    CONFIGURATION_REPO.flush()
    CONFIGURATION_REPO.reset()

    config = CONFIGURATION_REPO.get_config()
    assert config["highlight_seconds"] == 1.5
    assert config["max_import_rows"] == 20
    assert config["log_level"] == "DEBUG"


def test_set_data_path_moves_every_data_file(tmp_path):
    configuration.set_data_path(tmp_path / "elsewhere")
    assert configuration.DATA_PATH == Path(tmp_path / "elsewhere")
    assert configuration.DATA_TASKS_DIR == tmp_path / "elsewhere" / "tasks"
    assert configuration.DATA_CLIENTS_DIR == tmp_path / "elsewhere" / "clients"
    assert configuration.DATA_ID_MAP_PATH == tmp_path / "elsewhere" / "id_map.yaml"


def test_flush_and_sync_writes_everything(workspace):
    task_id = _new_task()
    client_id = _new_client()
    ID_MAP_REPO.associate_id("tasks", task_id)

    flush_and_sync()

    assert (workspace / "tasks" / f"{task_id}.yaml").is_file()
    assert (workspace / "clients" / f"{client_id}.yaml").is_file()
    assert "tasks" in (workspace / "id_map.yaml").read_text()
