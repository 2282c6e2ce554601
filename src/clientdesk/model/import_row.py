# SPDX-License-Identifier: MIT

from typing import Literal, TypedDict

from clientdesk.model.client import NewClient

ImportField = Literal["name", "email", "phone", "birthday", "address", "tags"]

IMPORT_FIELDS: tuple[ImportField, ...] = (
    "name",
    "email",
    "phone",
    "birthday",
    "address",
    "tags",
)


class ImportRowData(TypedDict):
    """Raw values of one CSV row, all trimmed strings."""

    name: str
    email: str
    phone: str
    birthday: str
    address: str
    tags: str


class ImportRow(TypedDict):
    id: str
    row_index: int
    data: ImportRowData
    is_valid: bool
    errors: dict[ImportField, str]


class BulkImportRequest(TypedDict):
    clients: list[NewClient]


class ImportRowError(TypedDict):
    row: int
    error: str


class BulkImportResult(TypedDict):
    imported: int
    failed: int
    errors: list[ImportRowError]
