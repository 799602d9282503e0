# SPDX-License-Identifier: MIT

from conftest import MONDAY, UTC, all_day_event, at, timed_event

from timegrid.service.visual_day import (
    all_day_date_range,
    belongs_to_visual_day,
    timed_events_for_visual_day,
    visible_days,
    visual_day_of_instant,
    visual_day_window,
    visual_minutes_of_instant,
)
from timegrid.time import utc_offset_timezone

TUESDAY = MONDAY.add(days=1)


def test_window_starts_at_the_offset() -> None:
    start, end = visual_day_window(MONDAY, 300, UTC)

    assert start == at(MONDAY, 5)
    assert end == at(TUESDAY, 5)


def test_instant_before_day_start_belongs_to_previous_day() -> None:
    assert visual_day_of_instant(at(TUESDAY, 4, 59), 300, UTC) == MONDAY
    assert visual_day_of_instant(at(TUESDAY, 5), 300, UTC) == TUESDAY
    assert belongs_to_visual_day(at(TUESDAY, 4, 59), MONDAY, 300, UTC)
    assert not belongs_to_visual_day(at(TUESDAY, 5), MONDAY, 300, UTC)


def test_visual_minutes() -> None:
    assert visual_minutes_of_instant(at(MONDAY, 6, 30), 300, UTC) == 90
    assert visual_minutes_of_instant(at(TUESDAY, 1), 300, UTC) == 1200


def test_fixed_offset_moves_the_window() -> None:
    plus_eight = utc_offset_timezone(8)
    start, _ = visual_day_window(MONDAY, 0, plus_eight)

    assert start == at(MONDAY.subtract(days=1), 16)


def test_timed_events_for_visual_day_skips_all_day() -> None:
    events = [
        timed_event("t", at(MONDAY, 9), at(MONDAY, 10)),
        all_day_event("a", MONDAY, MONDAY),
    ]

    assert [e["id"] for e in timed_events_for_visual_day(events, MONDAY, 0, UTC)] == ["t"]


def test_all_day_range_is_inclusive() -> None:
    assert all_day_date_range(all_day_event("a", MONDAY, TUESDAY), UTC) == (
        MONDAY,
        TUESDAY,
    )


def test_visible_days() -> None:
    assert visible_days(MONDAY, 3) == [MONDAY, TUESDAY, MONDAY.add(days=2)]
    assert visible_days(MONDAY, 0) == []
