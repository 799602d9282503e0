# SPDX-License-Identifier: MIT

import pytest
from conftest import MONDAY, UTC, at

from timegrid.color import color_priority_rank, color_style
from timegrid.time import (
    SystemClock,
    end_of_day_instant,
    format_minutes,
    instant_from_iso_str,
    instant_to_datetime,
    instant_to_iso_str,
    now_ms,
    parse_time_string,
    start_of_day_instant,
    utc_offset_label,
    utc_offset_timezone,
)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("14:30", (14, 30)),
        ("9:05", (9, 5)),
        ("1430", (14, 30)),
        ("14", (14, 0)),
        ("2:30pm", (14, 30)),
        ("2 PM", (14, 0)),
        ("12am", (0, 0)),
        ("12pm", (12, 0)),
        ("11:59 p.m.", (23, 59)),
    ],
)
def test_parse_time_string(text: str, expected: tuple[int, int]) -> None:
    assert parse_time_string(text) == expected


@pytest.mark.parametrize("text", ["", "25:00", "12:60", "noon", "1:2:3"])
def test_parse_time_string_rejects(text: str) -> None:
    assert parse_time_string(text) is None


def test_format_minutes() -> None:
    assert format_minutes(0) == "0:00"
    assert format_minutes(545) == "9:05"
    assert format_minutes(545, use_24_hour=False) == "9:05 AM"
    assert format_minutes(0, use_24_hour=False) == "12:00 AM"
    assert format_minutes(13 * 60, use_24_hour=False) == "1:00 PM"
    assert format_minutes(1440 + 60) == "1:00"


def test_utc_offset_label() -> None:
    assert utc_offset_label(8) == "GMT+8"
    assert utc_offset_label(0) == "GMT+0"
    assert utc_offset_label(-3.5) == "GMT-3:30"
    assert utc_offset_label(20) == "GMT+14"


def test_utc_offset_timezone_is_clamped() -> None:
    assert utc_offset_timezone(-20).offset == -12 * 3600


def test_day_boundaries() -> None:
    assert start_of_day_instant(MONDAY, UTC) == at(MONDAY, 0)
    assert end_of_day_instant(MONDAY, UTC) == at(MONDAY.add(days=1), 0) - 1


def test_millisecond_instants_survive_conversion() -> None:
    instant = at(MONDAY, 9) + 123

    assert instant_to_datetime(instant, UTC).microsecond == 123000
    assert instant_from_iso_str(instant_to_iso_str(instant)) == instant


def test_color_rank_is_total() -> None:
    assert color_priority_rank("red") == 0
    assert color_priority_rank("brown") == 6
    assert color_priority_rank(None) == 7
    assert color_priority_rank("chartreuse") == 7


def test_completed_events_are_dimmed() -> None:
    assert color_style("red") == "red"
    assert color_style("red", completed=True) == "bright_black"


def test_system_clock_reads_the_current_time() -> None:
    before = now_ms()
    reading = SystemClock().now_ms()

    assert before <= reading <= now_ms()
