# SPDX-License-Identifier: MIT

from typing import NotRequired, Optional, TypedDict

import pendulum

from clientdesk.model.entity_id import EntityId


class Client(TypedDict):
    id: Optional[EntityId]
    name: str
    email: str
    phone: Optional[str]
    birthday: Optional[str]
    address: Optional[str]
    tags: Optional[list[str]]
    created: pendulum.DateTime
    updated: pendulum.DateTime


class NewClient(TypedDict):
    """Client payload accepted by the bulk import sink."""

    name: str
    email: str
    phone: NotRequired[str]
    birthday: NotRequired[str]
    address: NotRequired[str]
    tags: NotRequired[list[str]]
