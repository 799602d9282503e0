# SPDX-License-Identifier: MIT

import random

import pytest
from conftest import MONDAY, UTC, at

from timegrid.service.coordinate import (
    clamp_minutes,
    clock_to_visual_minutes,
    minutes_to_pixel,
    pixel_delta_to_minutes,
    pixel_to_minutes,
    time_indicator_offset,
    visual_to_clock_minutes,
)


def test_pixel_to_minutes_is_relative_to_visual_day_start() -> None:
    assert pixel_to_minutes(120, 60) == 120
    assert pixel_to_minutes(120, 60, 300) == 120
    assert pixel_to_minutes(64, 64) == 60


def test_pixel_to_minutes_is_unclamped() -> None:
    assert pixel_to_minutes(-30, 60) == -30
    assert pixel_to_minutes(60 * 25, 60) == 60 * 25


@pytest.mark.parametrize("hour_height", [0, -10])
def test_non_positive_scale_does_not_raise(hour_height: float) -> None:
    assert pixel_to_minutes(2, hour_height) == 120
    assert minutes_to_pixel(120, hour_height) == 2


def test_round_trip_within_day() -> None:
    rng = random.Random(7)
    for _ in range(200):
        hour_height = rng.uniform(32, 800)
        pixel = rng.uniform(0, 24 * hour_height)
        offset = rng.randrange(0, 1440)
        minutes = pixel_to_minutes(pixel, hour_height, offset)
        assert minutes_to_pixel(minutes, hour_height, offset) == pytest.approx(pixel)


def test_pixel_delta() -> None:
    assert pixel_delta_to_minutes(32, 64) == 30
    assert pixel_delta_to_minutes(-32, 64) == -30


def test_visual_and_clock_minutes_wrap() -> None:
    assert visual_to_clock_minutes(0, 300) == 300
    assert visual_to_clock_minutes(1200, 300) == 60
    assert clock_to_visual_minutes(60, 300) == 1200
    assert clock_to_visual_minutes(300, 300) == 0


def test_clamp_minutes() -> None:
    assert clamp_minutes(-5) == 0
    assert clamp_minutes(2000) == 1440
    assert clamp_minutes(30, upper=20) == 20


def test_time_indicator_offset() -> None:
    now = at(MONDAY, 7, 30)
    # 07:30 is 150 minutes into a visual day starting at 05:00
    assert time_indicator_offset(now, 60, 300, UTC) == 150
    assert time_indicator_offset(now, 64, 0, UTC) == 7.5 * 64
