# SPDX-License-Identifier: MIT

from typing import TypeAlias, TypedDict

from clientdesk.model.entity_id import EntityId, EntityType


class IdMapping(TypedDict):
    """Both directions of the short id lookup for one entity type."""

    synthetic_to_real: dict[int, EntityId]
    real_to_synthetic: dict[EntityId, int]


IdMap: TypeAlias = dict[EntityType, IdMapping]
