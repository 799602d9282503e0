# SPDX-License-Identifier: MIT

"""
Pointer-driven scheduling: create, move, resize and all-day conversion.

The interaction is a state machine with at most one active DragSession.
Every input is a pure transition (session, input) -> (session', effects);
each pointer sample recomputes the whole proposal from the session's
original values and the total pointer travel, never from the previous
sample. DragController owns the session and applies the effects to an
EventStore in the order they were emitted.
"""

import logging
import math
from typing import Optional, TypeAlias

import pendulum

from timegrid.model.collaborator import EventStore
from timegrid.model.drag import (
    CreateEffect,
    DragMode,
    DragSession,
    Effect,
    GridGeometry,
    PointerSample,
    PreviewEffect,
    Proposal,
    ResizeEdge,
    RevertEffect,
    UpdateEffect,
)
from timegrid.model.entity_id import EntityId
from timegrid.model.event import Event, EventPatch, is_all_day, normalized_span
from timegrid.service.coordinate import clamp_minutes, pixel_to_minutes
from timegrid.service.snap import (
    minimum_duration_minutes,
    round_half_away_from_zero,
    snap,
    snap_granularity_minutes,
)
from timegrid.service.visual_day import (
    visual_day_boundaries,
    visual_day_window,
    visual_minutes_of_instant,
)
from timegrid.time import (
    MINUTES_PER_DAY,
    MS_PER_MINUTE,
    end_of_day_instant,
    instant_to_date,
    start_of_day_instant,
    utc_offset_timezone,
)

logger = logging.getLogger(__name__)

DEFAULT_CONVERTED_DURATION_MINUTES = 60

Transition: TypeAlias = tuple[Optional[DragSession], list[Effect]]


def effective_snap_minutes(geometry: GridGeometry) -> int:
    override = geometry.get("snap_minutes")
    if override:
        return override
    return snap_granularity_minutes(geometry["hour_height_px"])


def canvas_pixel(sample: PointerSample, geometry: GridGeometry) -> float:
    return sample["y"] - geometry["grid_top"] + sample["scroll_top"]


def column_at(x: float, geometry: GridGeometry) -> int:
    column_count = len(geometry["days"])
    if column_count == 0 or geometry["canvas_width"] <= 0:
        return 0
    column_width = geometry["canvas_width"] / column_count
    return max(0, min(column_count - 1, math.floor(x / column_width)))


def is_over_band(sample: PointerSample, geometry: GridGeometry) -> bool:
    return geometry["band_top"] <= sample["y"] <= geometry["band_bottom"]


def minutes_at(sample: PointerSample, geometry: GridGeometry) -> float:
    return pixel_to_minutes(
        canvas_pixel(sample, geometry),
        geometry["hour_height_px"],
        geometry["day_start_offset_minutes"],
    )


def snapped_minutes_at(sample: PointerSample, geometry: GridGeometry) -> float:
    minutes = snap(minutes_at(sample, geometry), effective_snap_minutes(geometry))
    return clamp_minutes(minutes)


def begin_create(sample: PointerSample, geometry: GridGeometry) -> Transition:
    if not geometry["days"]:
        return None, []
    column = column_at(sample["x"], geometry)
    minutes = snapped_minutes_at(sample, geometry)
    session = _new_session(
        "create", None, 0, 0, False, sample, geometry, column, minutes
    )
    return session, [_preview(None, column, minutes, minutes)]


def begin_event_drag(
    event: Event,
    edge: Optional[ResizeEdge],
    sample: PointerSample,
    geometry: GridGeometry,
) -> Transition:
    """Start dragging an event body, one of its edges, or an all-day banner."""
    if not geometry["days"]:
        return None, []
    mode: DragMode
    if is_all_day(event):
        mode = "convert_all_day"
    elif edge == "top":
        mode = "resize_top"
    elif edge == "bottom":
        mode = "resize_bottom"
    else:
        mode = "move"

    session = _new_session(
        mode,
        event["id"],
        event["start"],
        event["end"],
        is_all_day(event),
        sample,
        geometry,
        column_at(sample["x"], geometry),
        snapped_minutes_at(sample, geometry),
    )
    return session, []


def on_move(
    session: Optional[DragSession], sample: PointerSample, geometry: GridGeometry
) -> Transition:
    if session is None:
        return None, []
    if not geometry["days"]:
        return session, []

    mode = session["mode"]
    if mode == "create":
        return _create_move(session, sample, geometry)

    if mode in ("move", "convert_all_day") and not session["original_is_all_day"]:
        if is_over_band(sample, geometry):
            next_session = session.copy()
            next_session["mode"] = "convert_all_day"
            preview = _preview(
                session["target_event_id"],
                column_at(sample["x"], geometry),
                None,
                None,
                all_day_drop_target=True,
            )
            return next_session, [preview]
        next_session = session.copy()
        next_session["mode"] = "move"
        return _emit_update(next_session, _move_proposal(session, sample, geometry))

    if mode == "convert_all_day":
        if sample["y"] > geometry["band_bottom"]:
            return _emit_update(session, _timed_from_all_day(sample, geometry))
        if session["mutated"]:
            return _emit_update(session, _original_proposal(session))
        return session, []

    return _emit_update(session, _resize_proposal(session, sample, geometry))


def on_release(
    session: Optional[DragSession], sample: PointerSample, geometry: GridGeometry
) -> Transition:
    if session is None:
        return None, []
    if not geometry["days"]:
        return on_cancel(session)

    mode = session["mode"]
    target = session["target_event_id"]

    if mode == "create":
        end_minutes = snapped_minutes_at(sample, geometry)
        if end_minutes == session["start_minutes"]:
            # A press without travel is a click, not a creation
            return None, []
        start_minutes = min(session["start_minutes"], end_minutes)
        end_minutes = max(session["start_minutes"], end_minutes)
        column = min(session["start_column"], len(geometry["days"]) - 1)
        window_start, _ = visual_day_window(
            geometry["days"][column],
            geometry["day_start_offset_minutes"],
            _timezone(geometry),
        )
        create: CreateEffect = {
            "kind": "create",
            "proposal": {
                "start": window_start + _minutes_to_ms(start_minutes),
                "end": window_start + _minutes_to_ms(end_minutes),
                "all_day": False,
            },
        }
        return None, [create]

    if target is None:
        return None, []

    proposal: Optional[Proposal]
    if mode in ("move", "convert_all_day") and not session["original_is_all_day"]:
        if is_over_band(sample, geometry):
            proposal = _all_day_from_timed(session, geometry)
        else:
            proposal = _move_proposal(session, sample, geometry)
    elif mode == "convert_all_day":
        if sample["y"] > geometry["band_bottom"]:
            proposal = _timed_from_all_day(sample, geometry)
        elif session["mutated"]:
            proposal = _original_proposal(session)
        else:
            proposal = None
    else:
        proposal = _resize_proposal(session, sample, geometry)

    if proposal is None:
        return None, []
    update: UpdateEffect = {
        "kind": "update",
        "event_id": target,
        "proposal": proposal,
        "final": True,
    }
    return None, [update]


def on_cancel(session: Optional[DragSession]) -> Transition:
    """Escape: end the session and restore the original event if it changed."""
    if session is None:
        return None, []
    target = session["target_event_id"]
    if session["mode"] == "create" or target is None or not session["mutated"]:
        return None, []
    revert: RevertEffect = {
        "kind": "revert",
        "event_id": target,
        "proposal": _original_proposal(session),
    }
    return None, [revert]


def _new_session(
    mode: DragMode,
    target_event_id: Optional[EntityId],
    original_start: int,
    original_end: int,
    original_is_all_day: bool,
    sample: PointerSample,
    geometry: GridGeometry,
    column: int,
    minutes: float,
) -> DragSession:
    return {
        "mode": mode,
        "target_event_id": target_event_id,
        "original_start": original_start,
        "original_end": original_end,
        "original_is_all_day": original_is_all_day,
        "pointer_start_x": sample["x"],
        "pointer_start_y": sample["y"],
        "scroll_top_at_start": sample["scroll_top"],
        "start_column": column,
        "start_minutes": minutes,
        "pointer_start_minutes": minutes_at(sample, geometry),
        "last_proposal": None,
        "mutated": False,
    }


def _preview(
    event_id: Optional[EntityId],
    column: int,
    start_minutes: Optional[float],
    end_minutes: Optional[float],
    all_day_drop_target: bool = False,
) -> PreviewEffect:
    return {
        "kind": "preview",
        "event_id": event_id,
        "column": column,
        "start_minutes": start_minutes,
        "end_minutes": end_minutes,
        "all_day_drop_target": all_day_drop_target,
    }


def _create_move(
    session: DragSession, sample: PointerSample, geometry: GridGeometry
) -> Transition:
    minutes = snapped_minutes_at(sample, geometry)
    start = min(session["start_minutes"], minutes)
    end = max(session["start_minutes"], minutes)
    return session, [_preview(None, session["start_column"], start, end)]


def _emit_update(session: DragSession, proposal: Proposal) -> Transition:
    target = session["target_event_id"]
    if target is None:
        return session, []
    next_session = session.copy()
    next_session["last_proposal"] = proposal
    next_session["mutated"] = True
    update: UpdateEffect = {
        "kind": "update",
        "event_id": target,
        "proposal": proposal,
        "final": False,
    }
    return next_session, [update]


def _timezone(geometry: GridGeometry) -> pendulum.FixedTimezone:
    return utc_offset_timezone(geometry["utc_offset_hours"])


def _minutes_to_ms(minutes: float) -> int:
    return round_half_away_from_zero(minutes * MS_PER_MINUTE)


def _snapped_delta_minutes(
    session: DragSession, sample: PointerSample, geometry: GridGeometry
) -> float:
    delta = minutes_at(sample, geometry) - session["pointer_start_minutes"]
    return snap(delta, effective_snap_minutes(geometry))


def _original_proposal(session: DragSession) -> Proposal:
    return {
        "start": session["original_start"],
        "end": session["original_end"],
        "all_day": session["original_is_all_day"],
    }


def _move_proposal(
    session: DragSession, sample: PointerSample, geometry: GridGeometry
) -> Proposal:
    tz = _timezone(geometry)
    offset = geometry["day_start_offset_minutes"]
    original_start, original_end = normalized_span(
        session["original_start"], session["original_end"]
    )
    duration = original_end - original_start

    start_minutes = visual_minutes_of_instant(
        original_start, offset, tz
    ) + _snapped_delta_minutes(session, sample, geometry)
    window_start, window_end = visual_day_window(
        geometry["days"][column_at(sample["x"], geometry)], offset, tz
    )

    start = window_start + _minutes_to_ms(start_minutes)
    end = start + duration
    if start < window_start:
        start = window_start
        end = start + duration
    elif end > window_end:
        end = window_end
        start = end - duration
    return {"start": start, "end": end, "all_day": False}


def _resize_proposal(
    session: DragSession, sample: PointerSample, geometry: GridGeometry
) -> Proposal:
    tz = _timezone(geometry)
    original_start, original_end = normalized_span(
        session["original_start"], session["original_end"]
    )
    window_start, window_end = visual_day_boundaries(
        original_start, geometry["day_start_offset_minutes"], tz
    )
    delta = _minutes_to_ms(_snapped_delta_minutes(session, sample, geometry))
    min_duration = minimum_duration_minutes(effective_snap_minutes(geometry)) * MS_PER_MINUTE

    def clamp(instant: int) -> int:
        return max(window_start, min(window_end, instant))

    if session["mode"] == "resize_top":
        anchor = clamp(original_end)
        dragged = clamp(original_start + delta)
        dragged_is_start = dragged <= anchor
    else:
        anchor = clamp(original_start)
        dragged = clamp(original_end + delta)
        dragged_is_start = dragged < anchor

    if dragged_is_start:
        start, end = dragged, anchor
    else:
        start, end = anchor, dragged

    if end - start < min_duration:
        # Move the dragged edge away from the anchor, then the anchor itself
        # when the day boundary stops the dragged edge.
        if dragged_is_start:
            start = max(window_start, end - min_duration)
            if end - start < min_duration:
                end = min(window_end, start + min_duration)
        else:
            end = min(window_end, start + min_duration)
            if end - start < min_duration:
                start = max(window_start, end - min_duration)

    return {"start": start, "end": end, "all_day": False}


def _timed_from_all_day(sample: PointerSample, geometry: GridGeometry) -> Proposal:
    minutes = min(snapped_minutes_at(sample, geometry), MINUTES_PER_DAY - 1)
    window_start, window_end = visual_day_window(
        geometry["days"][column_at(sample["x"], geometry)],
        geometry["day_start_offset_minutes"],
        _timezone(geometry),
    )
    duration = DEFAULT_CONVERTED_DURATION_MINUTES * MS_PER_MINUTE
    start = window_start + _minutes_to_ms(minutes)
    end = start + duration
    if end > window_end:
        end = window_end
        start = end - duration
    return {"start": start, "end": end, "all_day": False}


def _all_day_from_timed(session: DragSession, geometry: GridGeometry) -> Proposal:
    tz = _timezone(geometry)
    day = instant_to_date(session["original_start"], tz)
    return {
        "start": start_of_day_instant(day, tz),
        "end": end_of_day_instant(day, tz),
        "all_day": True,
    }


class DragController:
    """
    Owns the active drag session and applies its effects to the event store.

    Samples delivered while no session is active, including those queued
    behind an Escape, are dropped.
    """

    def __init__(self, store: EventStore, geometry: GridGeometry) -> None:
        self._store = store
        self._geometry = geometry
        self._session: Optional[DragSession] = None
        self._preview: Optional[PreviewEffect] = None
        self._last_sample: Optional[PointerSample] = None
        self.created_event_ids: list[EntityId] = []

    @property
    def session(self) -> Optional[DragSession]:
        return self._session

    @property
    def is_active(self) -> bool:
        return self._session is not None

    @property
    def preview(self) -> Optional[PreviewEffect]:
        return self._preview

    @property
    def geometry(self) -> GridGeometry:
        return self._geometry

    def set_geometry(self, geometry: GridGeometry) -> None:
        self._geometry = geometry

    def press_canvas(self, sample: PointerSample) -> list[Effect]:
        if self._session is not None:
            logger.debug("press ignored, %s session active", self._session["mode"])
            return []
        return self._transition(begin_create(sample, self._geometry), sample)

    def press_event(
        self,
        event_id: EntityId,
        sample: PointerSample,
        edge: Optional[ResizeEdge] = None,
    ) -> list[Effect]:
        if self._session is not None:
            logger.debug("press ignored, %s session active", self._session["mode"])
            return []
        matching = [e for e in self._store.get_all_events() if e["id"] == event_id]
        if len(matching) == 0:
            logger.debug("press on unknown event %s ignored", event_id)
            return []
        return self._transition(
            begin_event_drag(matching[0], edge, sample, self._geometry), sample
        )

    def press_all_day_event(
        self, event_id: EntityId, sample: PointerSample
    ) -> list[Effect]:
        return self.press_event(event_id, sample)

    def move(self, sample: PointerSample) -> list[Effect]:
        if self._session is None:
            logger.debug("pointer sample without an active session dropped")
            return []
        return self._transition(on_move(self._session, sample, self._geometry), sample)

    def refresh(self, scroll_top: float) -> list[Effect]:
        """Re-evaluate the last sample after the viewport scrolled under it."""
        if self._session is None or self._last_sample is None:
            return []
        sample = self._last_sample.copy()
        sample["scroll_top"] = scroll_top
        return self.move(sample)

    def release(self, sample: PointerSample) -> list[Effect]:
        if self._session is None:
            return []
        return self._transition(
            on_release(self._session, sample, self._geometry), sample
        )

    def cancel(self) -> list[Effect]:
        if self._session is None:
            return []
        logger.debug("%s session cancelled", self._session["mode"])
        return self._transition(on_cancel(self._session), None)

    def _transition(
        self, transition: Transition, sample: Optional[PointerSample]
    ) -> list[Effect]:
        session, effects = transition
        if session is None and self._session is not None:
            logger.debug("%s session ended", self._session["mode"])
        elif session is not None and self._session is None:
            logger.debug(
                "%s session started on %s", session["mode"], session["target_event_id"]
            )
        self._session = session
        self._last_sample = sample if session is not None else None
        if session is None:
            self._preview = None

        for effect in effects:
            self._apply(effect)
        return effects

    def _apply(self, effect: Effect) -> None:
        if effect["kind"] == "preview":
            self._preview = effect
        elif effect["kind"] == "update":
            self._store.update_event(effect["event_id"], _patch(effect["proposal"]))
        elif effect["kind"] == "revert":
            self._store.update_event(effect["event_id"], _patch(effect["proposal"]))
        elif effect["kind"] == "create":
            proposal = effect["proposal"]
            event_id = self._store.create_event(
                {
                    "title": None,
                    "start": proposal["start"],
                    "end": proposal["end"],
                    "all_day": proposal["all_day"],
                    "color": None,
                }
            )
            self.created_event_ids.append(event_id)
            logger.debug("created event %s from drag", event_id)


def _patch(proposal: Proposal) -> EventPatch:
    return {
        "start": proposal["start"],
        "end": proposal["end"],
        "all_day": proposal["all_day"],
    }
