# SPDX-License-Identifier: MIT

import logging
from copy import deepcopy
from typing import Any, Optional, cast

from yaml import dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader  # noqa: F401
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from clientdesk import configuration, time
from clientdesk.errors import ClientNotFoundError
from clientdesk.model.client import Client
from clientdesk.model.entity_id import EntityId, generate_entity_id
from clientdesk.model.import_row import BulkImportRequest, BulkImportResult
from clientdesk.template.client import get_client_template

logger = logging.getLogger(__name__)


class ClientRepository:
    """Client store backed by one YAML file per client; also the bulk import sink."""

    def __init__(self) -> None:
        self._clients: Optional[list[Client]] = None
        self.is_dirty = False
        self._dirty_ids: set[str] = set()

    @property
    def clients(self) -> list[Client]:
        if self._clients is None:
            self.__load_data()
        if self._clients is None:
            raise ValueError()
        return self._clients

    def __load_data(self) -> None:
        self._clients = []
        if not configuration.DATA_CLIENTS_DIR.is_dir():
            return
        for file_path in sorted(configuration.DATA_CLIENTS_DIR.iterdir()):
            if file_path.suffix != ".yaml":
                continue
            raw_client = load(file_path.read_text(), Loader=Loader)
            if raw_client is not None:
                self._clients.append(
                    self.__convert_client_for_deserialization(raw_client)
                )
        self._clients.sort(key=lambda client: client["created"])

    def __save_data(self) -> None:
        configuration.DATA_CLIENTS_DIR.mkdir(parents=True, exist_ok=True)
        for client in self.clients:
            if client["id"] in self._dirty_ids:
                serializable_client = self.__convert_client_for_serialization(
                    deepcopy(client)
                )
                file_path = configuration.DATA_CLIENTS_DIR / f"{client['id']}.yaml"
                file_path.write_text(dump(serializable_client, Dumper=Dumper))

        self._dirty_ids.clear()

    def flush(self) -> bool:
        if self._clients is not None and self.is_dirty:
            self.__save_data()
            self.is_dirty = False
            return True
        return False

    def reset(self) -> None:
        self._clients = None
        self.is_dirty = False
        self._dirty_ids.clear()

    def __convert_client_for_serialization(self, client: Client) -> dict[str, Any]:
        serializable_client = cast(dict[str, Any], client)
        serializable_client["created"] = time.datetime_to_iso_str(
            serializable_client["created"]
        )
        serializable_client["updated"] = time.datetime_to_iso_str(
            serializable_client["updated"]
        )
        return serializable_client

    def __convert_client_for_deserialization(self, client: dict[str, Any]) -> Client:
        client["created"] = time.datetime_from_str(client["created"])
        client["updated"] = time.datetime_from_str(client["updated"])
        return cast(Client, client)

    def __find(self, id: EntityId) -> Client:
        for client in self.clients:
            if client["id"] == id:
                return client
        raise ClientNotFoundError(id)

    def find_by_email(self, email: str) -> Optional[Client]:
        normalized = email.strip().lower()
        for client in self.clients:
            if client["email"].strip().lower() == normalized:
                return deepcopy(client)
        return None

    def save_new_client(self, client: Client) -> EntityId:
        self.is_dirty = True

        client["id"] = generate_entity_id()

        # Deduplicate tags
        if client["tags"] is not None:
            client["tags"] = list(dict.fromkeys(client["tags"]))

        self.clients.append(client)
        self._dirty_ids.add(client["id"])

        return client["id"]

    def import_clients(self, request: BulkImportRequest) -> BulkImportResult:
        """
        Create clients from a bulk import request.

        A row whose email already belongs to a client fails on its own; the
        other rows are still created. Row numbers in errors are 1-based.
        """
        result: BulkImportResult = {"imported": 0, "failed": 0, "errors": []}

        for index, new_client in enumerate(request["clients"]):
            if self.find_by_email(new_client["email"]) is not None:
                result["failed"] += 1
                result["errors"].append(
                    {
                        "row": index + 1,
                        "error": f"A client with email {new_client['email']} already exists",
                    }
                )
                continue

            client = get_client_template()
            client["name"] = new_client["name"]
            client["email"] = new_client["email"]
            client["phone"] = new_client.get("phone")
            client["birthday"] = new_client.get("birthday")
            client["address"] = new_client.get("address")
            client["tags"] = new_client.get("tags")
            self.save_new_client(client)
            result["imported"] += 1

        logger.info(
            "imported %d client(s), %d failed", result["imported"], result["failed"]
        )
        return result

    def get_all_clients(self) -> list[Client]:
        return deepcopy(self.clients)

    def get_client(self, id: EntityId) -> Client:
        return deepcopy(self.__find(id))

    def get_client_name(self, id: EntityId) -> Optional[str]:
        for client in self.clients:
            if client["id"] == id:
                return client["name"]
        return None


CLIENT_REPO = ClientRepository()
