# SPDX-License-Identifier: MIT

import datetime
import re
from typing import Optional, cast

import pendulum

from clientdesk.errors import InvalidDueDateError

CALENDAR_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}")


def now_utc() -> pendulum.DateTime:
    return pendulum.now("UTC")


def today_local() -> pendulum.Date:
    return pendulum.now("local").date()


def datetime_to_iso_str(datetime: pendulum.DateTime) -> str:
    return datetime.isoformat()


def datetime_to_iso_str_optional(
    datetime: Optional[pendulum.DateTime],
) -> Optional[str]:
    if datetime is None:
        return None
    return datetime_to_iso_str(datetime)


def datetime_from_str(datetime: str) -> pendulum.DateTime:
    return cast(pendulum.DateTime, pendulum.parse(datetime))


def datetime_from_str_optional(datetime: Optional[str]) -> Optional[pendulum.DateTime]:
    if datetime is None:
        return None
    return datetime_from_str(datetime)


def date_to_str(date: datetime.date) -> str:
    return date.strftime("%Y-%m-%d")


def date_to_display_str(date: pendulum.Date) -> str:
    return date.format("MMM D, YYYY")


def parse_due_date(value: object) -> pendulum.Date:
    """
    Parse a calendar date.

    Accepts YYYY-MM-DD strings, full ISO 8601 datetimes (reduced to their local
    calendar date) and date/datetime instances.

    Raises:
        InvalidDueDateError: If the value is not a well-formed calendar date
    """
    if isinstance(value, datetime.datetime):
        return pendulum.instance(value).in_tz("local").date()
    if isinstance(value, datetime.date):
        return pendulum.date(value.year, value.month, value.day)
    if not isinstance(value, str):
        raise InvalidDueDateError(value)

    text = value.strip()
    if not CALENDAR_DATE_PATTERN.match(text):
        raise InvalidDueDateError(value)

    try:
        parsed = pendulum.parse(text, exact=True)
    except ValueError as e:
        raise InvalidDueDateError(value) from e

    if isinstance(parsed, pendulum.DateTime):
        return parsed.in_tz("local").date()
    if isinstance(parsed, pendulum.Date):
        return parsed
    raise InvalidDueDateError(value)


def parse_due_date_optional(value: object) -> Optional[pendulum.Date]:
    if value is None or (isinstance(value, str) and value.strip() == ""):
        return None
    return parse_due_date(value)


def try_parse_due_date(value: object) -> Optional[pendulum.Date]:
    """Parse a calendar date, returning None for missing or malformed input."""
    try:
        return parse_due_date_optional(value)
    except InvalidDueDateError:
        return None


def is_today(value: object, today: Optional[pendulum.Date] = None) -> bool:
    reference = today if today is not None else today_local()
    return parse_due_date(value) == reference


def is_tomorrow(value: object, today: Optional[pendulum.Date] = None) -> bool:
    reference = today if today is not None else today_local()
    return parse_due_date(value) == reference.add(days=1)


def is_past(value: object, today: Optional[pendulum.Date] = None) -> bool:
    """Check whether a date lies before today. A date due today is never past."""
    reference = today if today is not None else today_local()
    return parse_due_date(value) < reference


def days_until(value: object, today: Optional[pendulum.Date] = None) -> int:
    """Signed number of calendar days from today, negative for past dates."""
    reference = today if today is not None else today_local()
    return reference.diff(parse_due_date(value), False).in_days()
