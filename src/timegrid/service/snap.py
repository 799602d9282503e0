# SPDX-License-Identifier: MIT

import math

MIN_EVENT_DURATION_MINUTES = 5

# (minimum hour height in px, snap granularity in minutes), finest first
SNAP_THRESHOLDS: list[tuple[float, int]] = [
    (400.0, 1),
    (256.0, 5),
    (128.0, 10),
    (64.0, 15),
]
COARSEST_SNAP_MINUTES = 30


def snap_granularity_minutes(hour_height_px: float) -> int:
    """Snapping step for a zoom level: finer steps as the grid is zoomed in."""
    for threshold, granularity in SNAP_THRESHOLDS:
        if hour_height_px >= threshold:
            return granularity
    return COARSEST_SNAP_MINUTES


def round_half_away_from_zero(value: float) -> int:
    """
    Round to the nearest integer, ties going away from zero.

    Every pixel/minute conversion rounds this way; the built-in round()
    sends ties to even.
    """
    if value >= 0:
        return math.floor(value + 0.5)
    return -math.floor(-value + 0.5)


def snap(minutes: float, granularity: int) -> float:
    if granularity <= 0:
        return minutes
    return round_half_away_from_zero(minutes / granularity) * granularity


def minimum_duration_minutes(granularity: int) -> int:
    return max(granularity, MIN_EVENT_DURATION_MINUTES)
