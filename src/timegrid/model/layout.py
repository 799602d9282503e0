# SPDX-License-Identifier: MIT

from typing import TypedDict

from timegrid.model.entity_id import EntityId


class TimedSpan(TypedDict):
    event_id: EntityId
    # Minutes since the visual day start
    start: float
    end: float


class LaneAssignment(TypedDict):
    event_id: EntityId
    lane_index: int
    lane_count: int
    left_percent: float
    width_percent: float


class BandAssignment(TypedDict):
    event_id: EntityId
    row: int
    start_column: int
    end_column: int


class BandLayout(TypedDict):
    assignments: list[BandAssignment]
    row_count: int
    overflow_by_column: dict[int, int]
