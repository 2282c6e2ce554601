# SPDX-License-Identifier: MIT

import csv
import io
import itertools
import logging
import re
from pathlib import Path
from typing import Optional, cast

import pendulum

from clientdesk.configuration import DEFAULT_MAX_IMPORT_ROWS
from clientdesk.errors import CsvImportError, InvalidDueDateError
from clientdesk.model.client import NewClient
from clientdesk.model.import_row import (
    IMPORT_FIELDS,
    BulkImportRequest,
    ImportField,
    ImportRow,
    ImportRowData,
)
from clientdesk.time import parse_due_date, today_local

logger = logging.getLogger(__name__)

# Flexible US phone formats: 5551234567, (555) 123-4567, +1 555.123.4567
PHONE_PATTERN = re.compile(r"^(\+?1)?[\s.-]?\(?(\d{3})\)?[\s.-]?(\d{3})[\s.-]?(\d{4})$")
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
DATE_FORMAT_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
MAX_TAG_LENGTH = 50

CSV_COLUMN_LABELS: dict[ImportField, str] = {
    "name": "Name",
    "email": "Email",
    "phone": "Phone",
    "birthday": "Birthday",
    "address": "Address",
    "tags": "Tags",
}

HEADER_ALIASES: dict[str, ImportField] = {
    "name": "name",
    "full name": "name",
    "fullname": "name",
    "email": "email",
    "email address": "email",
    "phone": "phone",
    "phone number": "phone",
    "telephone": "phone",
    "birthday": "birthday",
    "date of birth": "birthday",
    "dob": "birthday",
    "address": "address",
    "tags": "tags",
    "tag": "tags",
}

TEMPLATE_EXAMPLE_ROWS = [
    {
        "Name": "John Doe",
        "Email": "john.doe@example.com",
        "Phone": "5551234567",
        "Birthday": "1990-05-15",
        "Address": "123 Main St, Dallas, TX 75001",
        "Tags": "Buyer, VIP",
    },
    {
        "Name": "Jane Smith",
        "Email": "jane.smith@example.com",
        "Phone": "5559876543",
        "Birthday": "1985-11-20",
        "Address": "456 Oak Ave, Austin, TX 73301",
        "Tags": "Seller",
    },
]

_row_ids = itertools.count(1)


# CSV parsing


def normalize_header(header: str) -> str:
    """Map a CSV header onto an import field, case-insensitively."""
    trimmed = header.strip().lower()
    return HEADER_ALIASES.get(trimmed, trimmed)


def parse_csv_text(
    text: str, max_rows: int = DEFAULT_MAX_IMPORT_ROWS
) -> tuple[list[ImportRowData], list[str]]:
    """
    Parse CSV text into typed rows, in file order.

    Returns:
        The rows and a list of non-fatal warnings

    Raises:
        CsvImportError: If required columns are missing, the file holds no rows,
            the row cap is exceeded or the CSV is malformed. The whole file is
            rejected in each case.
    """
    warnings: list[str] = []

    try:
        records = list(csv.reader(io.StringIO(text.lstrip("\ufeff"))))
    except csv.Error as e:
        raise CsvImportError(f"CSV parsing error: {e}") from e

    records = [record for record in records if any(cell.strip() for cell in record)]
    if len(records) == 0:
        raise CsvImportError("CSV file is empty. Please add at least one row.")

    headers = [normalize_header(header) for header in records[0]]
    missing = [
        CSV_COLUMN_LABELS[field] for field in ("name", "email") if field not in headers
    ]
    if missing:
        raise CsvImportError(
            f"Missing required columns: {', '.join(missing)}. Please use the template."
        )

    body = records[1:]
    if len(body) == 0:
        raise CsvImportError("CSV file is empty. Please add at least one row.")
    if len(body) > max_rows:
        raise CsvImportError(
            f"CSV has {len(body)} rows. Maximum is {max_rows} rows per import."
        )

    if any(len(record) != len(headers) for record in body):
        warnings.append(
            "Some rows have a different number of columns than the header."
        )

    rows: list[ImportRowData] = []
    for record in body:
        values: dict[str, str] = {}
        for header, cell in zip(headers, record):
            if header in IMPORT_FIELDS and header not in values:
                values[header] = cell.strip()
        rows.append(
            cast(
                ImportRowData,
                {field: values.get(field, "") for field in IMPORT_FIELDS},
            )
        )

    for warning in warnings:
        logger.warning(warning)
    logger.info("parsed %d row(s) from CSV", len(rows))
    return rows, warnings


def parse_csv_file(
    path: Path, max_rows: int = DEFAULT_MAX_IMPORT_ROWS
) -> tuple[list[ImportRowData], list[str]]:
    if path.suffix.lower() != ".csv":
        raise CsvImportError("Please upload a CSV file (.csv)")
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise CsvImportError(f"Failed to parse CSV: {e}") from e
    return parse_csv_text(text, max_rows)


def write_csv_template(path: Path) -> None:
    """Write the import template: header row plus two example rows."""
    with path.open("w", newline="", encoding="utf-8") as file:
        writer = csv.DictWriter(file, fieldnames=list(CSV_COLUMN_LABELS.values()))
        writer.writeheader()
        writer.writerows(TEMPLATE_EXAMPLE_ROWS)


# Row validation


def split_tags(tags: str) -> list[str]:
    return [tag.strip() for tag in tags.split(",")]


def _is_past_date(date_string: str, today: pendulum.Date) -> bool:
    return parse_due_date(date_string) < today


def _is_valid_date_format(date_string: str) -> bool:
    if not DATE_FORMAT_PATTERN.match(date_string):
        return False
    try:
        parse_due_date(date_string)
    except InvalidDueDateError:
        return False
    return True


def validate_import_row(
    data: ImportRowData, today: Optional[pendulum.Date] = None
) -> dict[ImportField, str]:
    """Field-level checks for one row; an empty result means the row is valid."""
    reference = today if today is not None else today_local()
    errors: dict[ImportField, str] = {}

    if not data["name"].strip():
        errors["name"] = "Name is required."

    email = data["email"].strip()
    if not email:
        errors["email"] = "Email is required."
    elif not EMAIL_PATTERN.match(email):
        errors["email"] = "Invalid email format. Please enter a valid email address."

    phone = data["phone"].strip()
    if phone and not PHONE_PATTERN.match(phone):
        errors["phone"] = "Invalid phone. Enter a 10-digit US number (e.g., 5551234567)."

    birthday = data["birthday"].strip()
    if birthday:
        if not _is_valid_date_format(birthday):
            errors["birthday"] = "Invalid date format. Use YYYY-MM-DD."
        elif not _is_past_date(birthday, reference):
            errors["birthday"] = "Birthday must be in the past."

    tags = data["tags"].strip()
    if tags:
        parsed_tags = split_tags(tags)
        if any(tag == "" for tag in parsed_tags):
            errors["tags"] = "Tags must be separated by single commas."
        elif any(len(tag) > MAX_TAG_LENGTH for tag in parsed_tags):
            errors["tags"] = f"Tags must be {MAX_TAG_LENGTH} characters or less."

    return errors


def generate_row_id() -> str:
    return f"import-row-{next(_row_ids)}"


def validate_all_rows(
    rows: list[ImportRowData], today: Optional[pendulum.Date] = None
) -> list[ImportRow]:
    """
    Validate every row and flag duplicate emails within the batch.

    Invalid rows are kept, in source order, so they can be shown with their
    errors. Duplicates are flagged on every occurrence after the first.
    """
    import_rows: list[ImportRow] = []
    for index, data in enumerate(rows):
        errors = validate_import_row(data, today)
        import_rows.append(
            {
                "id": generate_row_id(),
                "row_index": index,
                "data": data,
                "is_valid": len(errors) == 0,
                "errors": errors,
            }
        )

    first_seen: dict[str, int] = {}
    for index, row in enumerate(import_rows):
        email = row["data"]["email"].strip().lower()
        if not email:
            continue
        if email not in first_seen:
            first_seen[email] = index
            continue
        row["errors"]["email"] = f"Duplicate email. Same as row {first_seen[email] + 1}."
        row["is_valid"] = False

    return import_rows


def revalidate_row(
    row: ImportRow, all_rows: list[ImportRow], today: Optional[pendulum.Date] = None
) -> ImportRow:
    """Re-check one row after an inline edit, including duplicates in the batch."""
    errors = validate_import_row(row["data"], today)

    email = row["data"]["email"].strip().lower()
    if email:
        for other in all_rows:
            if other["id"] != row["id"] and other["data"]["email"].strip().lower() == email:
                errors["email"] = f"Duplicate email. Same as row {other['row_index'] + 1}."
                break

    return {**row, "errors": errors, "is_valid": len(errors) == 0}


def create_empty_row(row_index: int) -> ImportRow:
    return {
        "id": generate_row_id(),
        "row_index": row_index,
        "data": {
            "name": "",
            "email": "",
            "phone": "",
            "birthday": "",
            "address": "",
            "tags": "",
        },
        "is_valid": False,
        "errors": {
            "name": "Name is required.",
            "email": "Email is required.",
        },
    }


# Bulk import request


def format_phone_number(phone: str) -> str:
    """
    Format a US phone number as +1-XXX-XXX-XXXX.

    Returns the input unchanged when it does not hold exactly ten digits
    (eleven with a leading country code 1).
    """
    digits = re.sub(r"\D", "", phone)
    if len(digits) == 11 and digits.startswith("1"):
        digits = digits[1:]
    if len(digits) != 10:
        return phone
    return f"+1-{digits[0:3]}-{digits[3:6]}-{digits[6:]}"


def build_bulk_import_request(rows: list[ImportRow]) -> BulkImportRequest:
    """Build the import payload from the rows that passed validation."""
    clients: list[NewClient] = []
    for row in rows:
        if not row["is_valid"]:
            continue
        data = row["data"]
        client: NewClient = {"name": data["name"].strip(), "email": data["email"].strip()}
        if data["phone"].strip():
            client["phone"] = format_phone_number(data["phone"].strip())
        if data["birthday"].strip():
            client["birthday"] = data["birthday"].strip()
        if data["address"].strip():
            client["address"] = data["address"].strip()
        if data["tags"].strip():
            client["tags"] = split_tags(data["tags"])
        clients.append(client)
    return {"clients": clients}
