# SPDX-License-Identifier: MIT

import datetime

import pendulum

from timegrid.model.entity_id import EntityId
from timegrid.model.event import Event
from timegrid.model.layout import LaneAssignment, TimedSpan
from timegrid.service.coordinate import clamp_minutes
from timegrid.service.visual_day import (
    timed_events_for_visual_day,
    visual_day_window,
)
from timegrid.time import MS_PER_MINUTE


def lay_out_lanes(spans: list[TimedSpan]) -> dict[EntityId, LaneAssignment]:
    """
    Assign non-overlapping lanes to one day's timed events.

    Spans are placed in (start, end, id) order, each into the lowest lane
    whose last interval ends at or before the span starts. Intervals are
    half-open, so touching events share a lane. Events that overlap
    transitively form a cluster and share the cluster's lane count, which is
    the largest number of events active at one instant within it. An event
    that overlaps nothing gets a single full-width lane.

    Args:
        spans: Intervals in minutes since the visual day start

    Returns:
        Lane assignment per event id
    """
    ordered = sorted(
        (_normalized(span) for span in spans),
        key=lambda span: (span["start"], span["end"], span["event_id"]),
    )

    result: dict[EntityId, LaneAssignment] = {}
    cluster: list[tuple[EntityId, int]] = []
    lane_ends: list[float] = []
    cluster_end = float("-inf")

    for span in ordered:
        if cluster and span["start"] >= cluster_end:
            _close_cluster(cluster, len(lane_ends), result)
            cluster = []
            lane_ends = []
            cluster_end = float("-inf")

        lane_index = _first_free_lane(lane_ends, span["start"])
        if lane_index == len(lane_ends):
            lane_ends.append(span["end"])
        else:
            lane_ends[lane_index] = span["end"]

        cluster.append((span["event_id"], lane_index))
        cluster_end = max(cluster_end, span["end"])

    if cluster:
        _close_cluster(cluster, len(lane_ends), result)

    return result


def lay_out_day(
    events: list[Event],
    date: datetime.date,
    day_start_offset_minutes: int,
    tz: pendulum.FixedTimezone,
) -> dict[EntityId, LaneAssignment]:
    """Lay out the timed events whose start falls inside one visual day."""
    window_start, _ = visual_day_window(date, day_start_offset_minutes, tz)
    spans: list[TimedSpan] = []
    for event in timed_events_for_visual_day(
        events, date, day_start_offset_minutes, tz
    ):
        spans.append(
            {
                "event_id": event["id"],
                "start": clamp_minutes((event["start"] - window_start) / MS_PER_MINUTE),
                "end": clamp_minutes((event["end"] - window_start) / MS_PER_MINUTE),
            }
        )
    return lay_out_lanes(spans)


def _normalized(span: TimedSpan) -> TimedSpan:
    if span["end"] < span["start"]:
        return {"event_id": span["event_id"], "start": span["start"], "end": span["start"]}
    return span


def _first_free_lane(lane_ends: list[float], start: float) -> int:
    for index, lane_end in enumerate(lane_ends):
        if lane_end <= start:
            return index
    return len(lane_ends)


def _close_cluster(
    cluster: list[tuple[EntityId, int]],
    lane_count: int,
    result: dict[EntityId, LaneAssignment],
) -> None:
    width = 100.0 / lane_count
    for event_id, lane_index in cluster:
        result[event_id] = {
            "event_id": event_id,
            "lane_index": lane_index,
            "lane_count": lane_count,
            "left_percent": lane_index * width,
            "width_percent": width,
        }
