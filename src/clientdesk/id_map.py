# SPDX-License-Identifier: MIT

from clientdesk import state as app_state
from clientdesk.errors import ClientNotFoundError, TaskNotFoundError
from clientdesk.model.entity_id import EntityId
from clientdesk.repository.id_map import ID_MAP_REPO


def clear_id_map_if_required() -> None:
    if app_state.get_clear_ids():
        ID_MAP_REPO.clear_ids()


def resolve_task_id(synthetic_id: int) -> EntityId:
    """Map a displayed task id back to the stored one."""
    try:
        return ID_MAP_REPO.get_real_id("tasks", synthetic_id)
    except KeyError:
        raise TaskNotFoundError(str(synthetic_id)) from None


def resolve_client_id(synthetic_id: int) -> EntityId:
    try:
        return ID_MAP_REPO.get_real_id("clients", synthetic_id)
    except KeyError:
        raise ClientNotFoundError(str(synthetic_id)) from None
