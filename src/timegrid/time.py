# SPDX-License-Identifier: MIT

import datetime
import re
from typing import Optional, cast

import pendulum

MINUTES_PER_DAY = 24 * 60
MS_PER_MINUTE = 60 * 1000
MIN_UTC_OFFSET_HOURS = -12.0
MAX_UTC_OFFSET_HOURS = 14.0

_PM_INDICATORS = ["pm", "p.m.", "p.m"]
_AM_INDICATORS = ["am", "a.m.", "a.m"]


def now_utc() -> pendulum.DateTime:
    return pendulum.now("UTC")


def now_ms() -> int:
    return datetime_to_instant(now_utc())


def clamp_utc_offset(hours: float) -> float:
    return max(MIN_UTC_OFFSET_HOURS, min(MAX_UTC_OFFSET_HOURS, hours))


def utc_offset_timezone(hours: float) -> pendulum.FixedTimezone:
    return pendulum.fixed_timezone(int(round(clamp_utc_offset(hours) * 3600)))


def utc_offset_label(hours: float) -> str:
    """Format a numeric UTC offset as a GMT label, e.g. GMT+8 or GMT-3:30."""
    hours = clamp_utc_offset(hours)
    sign = "+" if hours >= 0 else "-"
    total_minutes = int(round(abs(hours) * 60))
    whole_hours, minutes = divmod(total_minutes, 60)
    if minutes == 0:
        return f"GMT{sign}{whole_hours}"
    return f"GMT{sign}{whole_hours}:{minutes:02d}"


def as_date(value: datetime.date) -> pendulum.Date:
    return pendulum.date(value.year, value.month, value.day)


def instant_to_datetime(
    instant: int, tz: pendulum.FixedTimezone
) -> pendulum.DateTime:
    seconds, millis = divmod(instant, 1000)
    return pendulum.from_timestamp(seconds, tz=tz).add(microseconds=millis * 1000)


def datetime_to_instant(value: pendulum.DateTime) -> int:
    return value.int_timestamp * 1000 + value.microsecond // 1000


def instant_to_date(instant: int, tz: pendulum.FixedTimezone) -> pendulum.Date:
    return instant_to_datetime(instant, tz).date()


def start_of_day_instant(date: datetime.date, tz: pendulum.FixedTimezone) -> int:
    return datetime_to_instant(pendulum.datetime(date.year, date.month, date.day, tz=tz))


def end_of_day_instant(date: datetime.date, tz: pendulum.FixedTimezone) -> int:
    """Last millisecond of the given day."""
    return start_of_day_instant(as_date(date).add(days=1), tz) - 1


def instant_to_display_str(instant: int, tz: pendulum.FixedTimezone) -> str:
    return instant_to_datetime(instant, tz).format("MMM-DD ddd HH:mm")


def instant_to_display_str_optional(
    instant: Optional[int], tz: pendulum.FixedTimezone
) -> Optional[str]:
    if instant is None:
        return None
    return instant_to_display_str(instant, tz)


def date_to_display_str(date: datetime.date) -> str:
    return as_date(date).format("YYYY-MM-DD ddd")


def datetime_from_str(value: str, tz: pendulum.FixedTimezone) -> pendulum.DateTime:
    """Parse an ISO-like local date or date-time in the given fixed offset."""
    return cast(pendulum.DateTime, pendulum.parse(value, tz=tz))


def format_minutes(total_minutes: float, use_24_hour: bool = True) -> str:
    """Format minutes-of-day as 9:05 or 9:05 AM."""
    normalized = int(total_minutes) % MINUTES_PER_DAY
    hours, minutes = divmod(normalized, 60)
    if use_24_hour:
        return f"{hours}:{minutes:02d}"
    display_hours = 12 if hours == 0 else hours - 12 if hours > 12 else hours
    meridiem = "AM" if hours < 12 else "PM"
    return f"{display_hours}:{minutes:02d} {meridiem}"


def parse_time_string(value: str) -> Optional[tuple[int, int]]:
    """
    Parse a time of day into (hour, minute).

    Accepts 14:30, 1430, 14 and 12-hour forms such as 2:30pm, 2 PM or 12am.
    Returns None when the text is not a valid time.
    """
    if not value:
        return None

    text = value.strip().lower()
    is_pm = False
    is_am = False
    for indicator in _PM_INDICATORS:
        if indicator in text:
            is_pm = True
            text = text.replace(indicator, "").strip()
            break
    if not is_pm:
        for indicator in _AM_INDICATORS:
            if indicator in text:
                is_am = True
                text = text.replace(indicator, "").strip()
                break

    colon_match = re.match(r"^(\d{1,2}):(\d{1,2})$", text)
    four_digit_match = re.match(r"^(\d{2})(\d{2})$", text)
    hours_only_match = re.match(r"^(\d{1,2})$", text)
    if colon_match:
        hour, minute = int(colon_match.group(1)), int(colon_match.group(2))
    elif four_digit_match:
        hour, minute = int(four_digit_match.group(1)), int(four_digit_match.group(2))
    elif hours_only_match:
        hour, minute = int(hours_only_match.group(1)), 0
    else:
        return None

    if is_pm and hour < 12:
        hour += 12
    elif is_am and hour == 12:
        hour = 0

    if hour > 23 or minute > 59:
        return None
    return hour, minute


def instant_to_iso_str(instant: int) -> str:
    return instant_to_datetime(instant, utc_offset_timezone(0)).isoformat()


def instant_from_iso_str(value: str) -> int:
    return datetime_to_instant(cast(pendulum.DateTime, pendulum.parse(value)))


class SystemClock:
    def now_ms(self) -> int:
        return now_ms()
