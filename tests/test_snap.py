# SPDX-License-Identifier: MIT

import random

import pytest

from timegrid.service.snap import (
    minimum_duration_minutes,
    round_half_away_from_zero,
    snap,
    snap_granularity_minutes,
)


@pytest.mark.parametrize(
    "hour_height, granularity",
    [
        (800, 1),
        (400, 1),
        (399.9, 5),
        (256, 5),
        (255, 10),
        (128, 10),
        (127, 15),
        (64, 15),
        (63.9, 30),
        (32, 30),
        (1, 30),
    ],
)
def test_granularity_thresholds(hour_height: float, granularity: int) -> None:
    assert snap_granularity_minutes(hour_height) == granularity


def test_granularity_never_coarsens_when_zooming_in() -> None:
    heights = [32 + step * 0.5 for step in range(1537)]
    granularities = [snap_granularity_minutes(h) for h in heights]
    assert granularities == sorted(granularities, reverse=True)


def test_ties_round_away_from_zero() -> None:
    assert round_half_away_from_zero(0.5) == 1
    assert round_half_away_from_zero(2.5) == 3
    assert round_half_away_from_zero(-0.5) == -1
    assert round_half_away_from_zero(-2.5) == -3
    assert round_half_away_from_zero(2.4999) == 2


def test_snap_rounds_to_nearest_step() -> None:
    assert snap(220, 15) == 225
    assert snap(220, 30) == 210
    assert snap(7.5, 15) == 15
    assert snap(-7.5, 15) == -15
    assert snap(37, 1) == 37


@pytest.mark.parametrize("granularity", [0, -5])
def test_snap_with_non_positive_granularity_is_identity(granularity: int) -> None:
    assert snap(12.3, granularity) == 12.3


def test_snap_is_idempotent() -> None:
    rng = random.Random(11)
    for _ in range(500):
        minutes = rng.uniform(-1440, 2880)
        granularity = rng.choice([1, 5, 10, 15, 30])
        once = snap(minutes, granularity)
        assert snap(once, granularity) == once


def test_minimum_duration() -> None:
    assert minimum_duration_minutes(1) == 5
    assert minimum_duration_minutes(5) == 5
    assert minimum_duration_minutes(30) == 30
