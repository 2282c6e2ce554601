# SPDX-License-Identifier: MIT

from clientdesk.model.entity_id import ENTITY_TYPES
from clientdesk.model.id_map import IdMap


def get_id_map_template() -> IdMap:
    return {
        entity_type: {"synthetic_to_real": {}, "real_to_synthetic": {}}
        for entity_type in ENTITY_TYPES
    }
