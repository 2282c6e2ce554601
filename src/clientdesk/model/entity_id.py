# SPDX-License-Identifier: MIT

import uuid
from typing import Literal, TypeAlias, get_args

EntityId: TypeAlias = str

# Entities that get short numeric ids in the terminal
EntityType = Literal["tasks", "clients"]
ENTITY_TYPES: tuple[EntityType, ...] = get_args(EntityType)


def generate_entity_id() -> EntityId:
    """Random uuid4 string; it doubles as the entity's file name."""
    return str(uuid.uuid4())
