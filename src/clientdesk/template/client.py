# SPDX-License-Identifier: MIT

from clientdesk.model.client import Client
from clientdesk.time import now_utc


def get_client_template() -> Client:
    now = now_utc()
    return {
        "id": None,
        "name": "",
        "email": "",
        "phone": None,
        "birthday": None,
        "address": None,
        "tags": None,
        "created": now,
        "updated": now,
    }
