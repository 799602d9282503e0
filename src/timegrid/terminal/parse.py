# SPDX-License-Identifier: MIT

import re
from typing import Optional

import pendulum
import typer

from timegrid.repository.configuration import CONFIGURATION_REPO
from timegrid.time import datetime_from_str, parse_time_string, utc_offset_timezone


def configured_timezone() -> pendulum.FixedTimezone:
    return utc_offset_timezone(CONFIGURATION_REPO.get_config()["utc_offset_hours"])


def parse_datetime(
    datetime_param: Optional[str | int],
    tz: Optional[pendulum.FixedTimezone] = None,
) -> Optional[pendulum.DateTime]:
    """
    Parse a command-line date or time in the configured UTC offset.

    Accepts YYYY-MM-DD with an optional time, a time of day on today's date
    (14:30, 1430, 2:30pm, 12am), now, today, yesterday, tomorrow, or a whole
    number of days from today. Four digits that form a valid time are a
    time of day, so 1430 is 14:30 and 9999 is a day offset.
    """
    if datetime_param is None:
        return None
    if tz is None:
        tz = configured_timezone()

    datetime = str(datetime_param).strip()
    today = pendulum.now(tz).start_of("day")

    # Match YYYY-MM-DD format (with optional time component)
    if re.match(r"^\d{4}-\d{2}-\d{2}", datetime):
        try:
            return datetime_from_str(datetime, tz)
        except ValueError as e:
            raise typer.BadParameter(f"Invalid date: {e}")

    # Four digits are a time of day (1430), other whole numbers a day offset
    if re.match(r"^\d{4}$", datetime):
        time_of_day = parse_time_string(datetime)
        if time_of_day is not None:
            hour, minute = time_of_day
            return today.set(hour=hour, minute=minute)

    if re.match(r"^-?\d+$", datetime):
        return today.add(days=int(datetime))

    if datetime == "now" or datetime == "n":
        return pendulum.now(tz)
    if datetime == "today" or datetime == "t":
        return today
    if datetime == "yesterday" or datetime == "y":
        return today.subtract(days=1)
    if datetime == "tomorrow" or datetime == "o":
        return today.add(days=1)

    time_of_day = parse_time_string(datetime)
    if time_of_day is not None:
        hour, minute = time_of_day
        return today.set(hour=hour, minute=minute)

    raise typer.BadParameter("Incorrect datetime format")


def parse_date(date_param: Optional[str]) -> Optional[pendulum.Date]:
    parsed = parse_datetime(date_param)
    if parsed is None:
        return None
    return parsed.date()


def parse_time(time_str: Optional[str]) -> Optional[tuple[int, int]]:
    """
    Parse a time of day such as 8:00, 1730 or 5:30pm into (hour, minute).

    Raises:
        typer.BadParameter: If the text is not a valid time of day
    """
    if time_str is None:
        return None
    time_of_day = parse_time_string(time_str)
    if time_of_day is None:
        raise typer.BadParameter(
            f"Time must look like 8:00, 1730 or 5:30pm, got '{time_str}'"
        )
    return time_of_day
