"""Shared fixtures: every test gets its own config file and data directory."""

from pathlib import Path
from typing import Callable, Optional

import pendulum
import pytest

from clientdesk import configuration
from clientdesk import state as app_state
from clientdesk.initialize import initialize
from clientdesk.model.task import Task
from clientdesk.repository.client import CLIENT_REPO
from clientdesk.repository.configuration import CONFIGURATION_REPO
from clientdesk.repository.id_map import ID_MAP_REPO
from clientdesk.repository.task import TASK_REPO

TODAY = pendulum.date(2026, 10, 18)


def _reset_repositories() -> None:
    CONFIGURATION_REPO.reset()
    ID_MAP_REPO.reset()
    CLIENT_REPO.reset()
    TASK_REPO.reset()


@pytest.fixture(autouse=True)
def workspace(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    config_path = tmp_path / "config"
    data_path = tmp_path / "data"

    monkeypatch.setattr(configuration, "CONFIG_PATH", config_path)
    monkeypatch.setattr(configuration, "APP_CONFIG_PATH", config_path / "config.yaml")
    monkeypatch.setattr(configuration, "DATA_PATH", data_path)
    monkeypatch.setattr(configuration, "DATA_TASKS_DIR", data_path / "tasks")
    monkeypatch.setattr(configuration, "DATA_CLIENTS_DIR", data_path / "clients")
    monkeypatch.setattr(configuration, "DATA_ID_MAP_PATH", data_path / "id_map.yaml")

    _reset_repositories()
    initialize()
    app_state.set_show_header(True)
    app_state.set_clear_ids(True)

    yield data_path

    _reset_repositories()


@pytest.fixture
def today() -> pendulum.Date:
    return TODAY


@pytest.fixture
def make_task() -> Callable[..., Task]:
    def _make_task(
        id: str,
        status: str = "todo",
        due_date: Optional[str] = None,
        priority: str = "medium",
        title: Optional[str] = None,
        due_in: Optional[int] = None,
    ) -> Task:
        if due_in is not None:
            due_date = TODAY.add(days=due_in).to_date_string()
        created = pendulum.datetime(2026, 10, 1, tz="UTC")
        return {
            "id": id,
            "client_id": None,
            "title": title if title is not None else f"task {id}",
            "description": None,
            "due_date": due_date,
            "priority": priority,  # type: ignore[typeddict-item]
            "status": status,  # type: ignore[typeddict-item]
            "completed_at": None,
            "created": created,
            "updated": created,
        }

    return _make_task
