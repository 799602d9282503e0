# SPDX-License-Identifier: MIT

import pendulum

from timegrid.service.visual_day import visual_minutes_of_instant
from timegrid.time import MINUTES_PER_DAY


def _positive_scale(hour_height_px: float) -> float:
    if hour_height_px <= 0:
        return 1.0
    return hour_height_px


def pixel_to_minutes(
    pixel_offset: float,
    hour_height_px: float,
    day_start_offset_minutes: int = 0,
) -> float:
    """
    Convert a canvas pixel offset to minutes since the visual day start.

    The canvas top is the visual day start, so the offset only selects the
    frame of the result; use visual_to_clock_minutes for wall-clock time.
    The result is not clamped.
    """
    return pixel_offset * 60.0 / _positive_scale(hour_height_px)


def minutes_to_pixel(
    minutes: float,
    hour_height_px: float,
    day_start_offset_minutes: int = 0,
) -> float:
    """Inverse of pixel_to_minutes."""
    return minutes * _positive_scale(hour_height_px) / 60.0


def pixel_delta_to_minutes(pixel_delta: float, hour_height_px: float) -> float:
    return pixel_delta * 60.0 / _positive_scale(hour_height_px)


def visual_to_clock_minutes(minutes: float, day_start_offset_minutes: int) -> float:
    return (minutes + day_start_offset_minutes) % MINUTES_PER_DAY


def clock_to_visual_minutes(minutes: float, day_start_offset_minutes: int) -> float:
    return (minutes - day_start_offset_minutes) % MINUTES_PER_DAY


def clamp_minutes(minutes: float, upper: float = MINUTES_PER_DAY) -> float:
    return max(0.0, min(upper, minutes))


def time_indicator_offset(
    now: int,
    hour_height_px: float,
    day_start_offset_minutes: int,
    tz: pendulum.FixedTimezone,
) -> float:
    """Canvas pixel offset of the current-time line."""
    minutes = visual_minutes_of_instant(now, day_start_offset_minutes, tz)
    return minutes_to_pixel(minutes, hour_height_px, day_start_offset_minutes)
