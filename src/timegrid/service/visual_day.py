# SPDX-License-Identifier: MIT

import datetime

import pendulum

from timegrid.model.event import (
    AllDayEvent,
    Event,
    Instant,
    TimedEvent,
    is_all_day,
    is_timed,
    normalized_span,
)
from timegrid.time import (
    MINUTES_PER_DAY,
    MS_PER_MINUTE,
    as_date,
    instant_to_datetime,
    start_of_day_instant,
)


def visual_day_window(
    date: datetime.date, day_start_offset_minutes: int, tz: pendulum.FixedTimezone
) -> tuple[Instant, Instant]:
    """
    Start and end instants of the visual day labelled by date.

    A visual day runs from day_start_offset_minutes on its calendar date to
    the same time on the next date; the end is exclusive.
    """
    start = start_of_day_instant(date, tz) + day_start_offset_minutes * MS_PER_MINUTE
    return start, start + MINUTES_PER_DAY * MS_PER_MINUTE


def visual_day_of_instant(
    instant: Instant, day_start_offset_minutes: int, tz: pendulum.FixedTimezone
) -> pendulum.Date:
    local = instant_to_datetime(instant, tz)
    date = local.date()
    if local.hour * 60 + local.minute < day_start_offset_minutes:
        # Late-night instants belong to the previous date's visual day
        date = date.subtract(days=1)
    return date


def visual_day_boundaries(
    instant: Instant, day_start_offset_minutes: int, tz: pendulum.FixedTimezone
) -> tuple[Instant, Instant]:
    date = visual_day_of_instant(instant, day_start_offset_minutes, tz)
    return visual_day_window(date, day_start_offset_minutes, tz)


def visual_minutes_of_instant(
    instant: Instant, day_start_offset_minutes: int, tz: pendulum.FixedTimezone
) -> float:
    window_start, _ = visual_day_boundaries(instant, day_start_offset_minutes, tz)
    return (instant - window_start) / MS_PER_MINUTE


def belongs_to_visual_day(
    instant: Instant,
    date: datetime.date,
    day_start_offset_minutes: int,
    tz: pendulum.FixedTimezone,
) -> bool:
    window_start, window_end = visual_day_window(date, day_start_offset_minutes, tz)
    return window_start <= instant < window_end


def timed_events_for_visual_day(
    events: list[Event],
    date: datetime.date,
    day_start_offset_minutes: int,
    tz: pendulum.FixedTimezone,
) -> list[TimedEvent]:
    return [
        event
        for event in events
        if is_timed(event)
        and belongs_to_visual_day(event["start"], date, day_start_offset_minutes, tz)
    ]


def all_day_date_range(
    event: AllDayEvent, tz: pendulum.FixedTimezone
) -> tuple[pendulum.Date, pendulum.Date]:
    """
    First and last calendar dates covered by an all-day event.

    The stored end is inclusive; an end exactly at a later midnight is read
    as exclusive so the event does not spill into that day.
    """
    start, end = normalized_span(event["start"], event["end"])
    first = instant_to_datetime(start, tz).date()
    end_local = instant_to_datetime(end, tz)
    last = end_local.date()
    if end > start and last > first and end == start_of_day_instant(last, tz):
        last = last.subtract(days=1)
    return first, last


def all_day_events(events: list[Event]) -> list[AllDayEvent]:
    return [event for event in events if is_all_day(event)]


def visible_days(start_date: datetime.date, count: int) -> list[pendulum.Date]:
    first = as_date(start_date)
    return [first.add(days=offset) for offset in range(max(0, count))]
