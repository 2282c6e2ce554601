# SPDX-License-Identifier: MIT

import re
from typing import Optional

import pendulum
import typer

from clientdesk.errors import InvalidDueDateError
from clientdesk.time import parse_due_date, today_local


def parse_date(date_param: Optional[str | int]) -> Optional[pendulum.Date]:
    if date_param is None:
        return None

    date = str(date_param).strip()

    # Match YYYY-MM-DD format
    if re.match(r"\d{4}-\d{2}-\d{2}", date):
        try:
            return parse_due_date(date)
        except InvalidDueDateError as e:
            raise typer.BadParameter(str(e))

    # Match numeric input for relative days (e.g., "1", "-1", "365")
    if re.match(r"^-?\d+$", date):
        return today_local().add(days=int(date))

    if date == "today" or date == "t":
        return today_local()
    if date == "yesterday" or date == "y":
        return today_local().subtract(days=1)
    if date == "tomorrow" or date == "o":
        return today_local().add(days=1)
    raise typer.BadParameter("Incorrect date format")
