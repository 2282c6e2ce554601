# SPDX-License-Identifier: MIT

from typing import Optional, cast

from yaml import dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader  # noqa: F401
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from clientdesk import configuration
from clientdesk.model.entity_id import ENTITY_TYPES, EntityId, EntityType
from clientdesk.model.id_map import IdMap, IdMapping
from clientdesk.template.id_map import get_id_map_template


class IdMapRepository:
    """Short numeric ids shown in the terminal, persisted in id_map.yaml."""

    def __init__(self) -> None:
        self._id_map: Optional[IdMap] = None
        self.is_dirty = False

    @property
    def id_map(self) -> IdMap:
        if self._id_map is None:
            self._id_map = self.__load_data()
        return self._id_map

    def __load_data(self) -> IdMap:
        template = get_id_map_template()
        if not configuration.DATA_ID_MAP_PATH.is_file():
            return template

        id_map: Optional[IdMap] = load(
            configuration.DATA_ID_MAP_PATH.read_text(), Loader=Loader
        )
        if id_map is None:
            return template
        for entity_type, mapping in template.items():
            id_map.setdefault(entity_type, mapping)
        return id_map

    def flush(self) -> bool:
        if self._id_map is None or not self.is_dirty:
            return False
        configuration.DATA_ID_MAP_PATH.write_text(dump(self._id_map, Dumper=Dumper))
        self.is_dirty = False
        return True

    def reset(self) -> None:
        self._id_map = None
        self.is_dirty = False

    def clear_ids(self) -> None:
        self._id_map = get_id_map_template()
        self.is_dirty = True

    def __mapping(self, entity_type: str) -> IdMapping:
        if entity_type not in ENTITY_TYPES:
            raise TypeError(
                f"unknown entity type {entity_type!r}, expected one of: {', '.join(ENTITY_TYPES)}"
            )
        return self.id_map[cast(EntityType, entity_type)]

    def associate_id(self, entity_type: str, entity_id: EntityId) -> int:
        """Short id for an entity, handing out the next number on first use."""
        mapping = self.__mapping(entity_type)
        synthetic_id = mapping["real_to_synthetic"].get(entity_id)
        if synthetic_id is not None:
            return synthetic_id

        synthetic_id = len(mapping["synthetic_to_real"]) + 1
        mapping["synthetic_to_real"][synthetic_id] = entity_id
        mapping["real_to_synthetic"][entity_id] = synthetic_id
        self.is_dirty = True
        return synthetic_id

    def get_real_id(self, entity_type: str, synthetic_id: int) -> EntityId:
        """Raises KeyError for a short id that was never handed out."""
        return self.__mapping(entity_type)["synthetic_to_real"][synthetic_id]


ID_MAP_REPO = IdMapRepository()
