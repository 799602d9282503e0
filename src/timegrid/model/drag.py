# SPDX-License-Identifier: MIT

from typing import Literal, NotRequired, Optional, TypeAlias, TypedDict

import pendulum

from timegrid.model.entity_id import EntityId
from timegrid.model.event import Instant

DragMode = Literal[
    "create",
    "move",
    "resize_top",
    "resize_bottom",
    "convert_all_day",
]

ResizeEdge = Literal["top", "bottom"]


class PointerSample(TypedDict):
    # x relative to the left edge of the day columns, y in viewport coordinates
    x: float
    y: float
    scroll_top: float


class GridGeometry(TypedDict):
    days: list[pendulum.Date]
    canvas_width: float
    # Viewport y of the top of the scrollable time canvas
    grid_top: float
    band_top: float
    band_bottom: float
    hour_height_px: float
    day_start_offset_minutes: int
    utc_offset_hours: float
    snap_minutes: NotRequired[Optional[int]]


class Proposal(TypedDict):
    start: Instant
    end: Instant
    all_day: bool


class DragSession(TypedDict):
    mode: DragMode
    target_event_id: Optional[EntityId]
    original_start: Instant
    original_end: Instant
    original_is_all_day: bool
    pointer_start_x: float
    pointer_start_y: float
    scroll_top_at_start: float
    start_column: int
    # Snapped visual-day minute under the pointer at press time
    start_minutes: float
    # Unsnapped minute under the pointer at press time, at the press-time scale
    pointer_start_minutes: float
    last_proposal: Optional[Proposal]
    mutated: bool


class PreviewEffect(TypedDict):
    kind: Literal["preview"]
    event_id: Optional[EntityId]
    column: int
    start_minutes: Optional[float]
    end_minutes: Optional[float]
    all_day_drop_target: bool


class UpdateEffect(TypedDict):
    kind: Literal["update"]
    event_id: EntityId
    proposal: Proposal
    final: bool


class CreateEffect(TypedDict):
    kind: Literal["create"]
    proposal: Proposal


class RevertEffect(TypedDict):
    kind: Literal["revert"]
    event_id: EntityId
    proposal: Proposal


Effect: TypeAlias = PreviewEffect | UpdateEffect | CreateEffect | RevertEffect
