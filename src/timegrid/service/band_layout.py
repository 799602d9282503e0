# SPDX-License-Identifier: MIT

import datetime
from typing import Callable, Optional

import pendulum

from timegrid.color import color_priority_rank as default_color_priority_rank
from timegrid.model.event import AllDayEvent, Event, is_all_day, normalized_span
from timegrid.model.layout import BandAssignment, BandLayout
from timegrid.service.visual_day import all_day_date_range

MAX_VISIBLE_ROWS = 3


def lay_out_band(
    events: list[Event],
    days: list[datetime.date],
    tz: pendulum.FixedTimezone,
    color_priority_rank: Callable[[Optional[str]], int] = default_color_priority_rank,
    max_visible_rows: int = MAX_VISIBLE_ROWS,
) -> BandLayout:
    """
    Assign rows to all-day events across a range of visible days.

    Events are placed by color priority, then longest first, then earliest
    start, each into the lowest row whose columns are all free. Events
    reaching outside the range are clipped to it; events entirely outside
    it are left out.

    Args:
        events: Events to place; timed events are ignored
        days: Consecutive visible days, one column each
        tz: Fixed offset used to find the calendar days an event covers
        color_priority_rank: Total function ranking event colors
        max_visible_rows: Rows shown before the "+N more" overflow

    Returns:
        Row and column span per event, the row count, and the number of
        events per column beyond max_visible_rows
    """
    if not days:
        return {"assignments": [], "row_count": 0, "overflow_by_column": {}}

    first_ordinal = days[0].toordinal()
    column_count = len(days)

    band_events = [event for event in events if is_all_day(event)]
    ordered = sorted(
        band_events,
        key=lambda event: (
            color_priority_rank(event["color"]),
            -_duration(event),
            event["start"],
            event["id"],
        ),
    )

    assignments: list[BandAssignment] = []
    occupancy: list[list[bool]] = []

    for event in ordered:
        first, last = all_day_date_range(event, tz)
        start_column = max(0, first.toordinal() - first_ordinal)
        end_column = min(column_count - 1, last.toordinal() - first_ordinal)
        if start_column > column_count - 1 or end_column < 0:
            continue

        row = 0
        while True:
            if row == len(occupancy):
                occupancy.append([False] * column_count)
            if not any(occupancy[row][start_column : end_column + 1]):
                break
            row += 1

        for column in range(start_column, end_column + 1):
            occupancy[row][column] = True

        assignments.append(
            {
                "event_id": event["id"],
                "row": row,
                "start_column": start_column,
                "end_column": end_column,
            }
        )

    overflow_by_column: dict[int, int] = {}
    for column in range(column_count):
        count = sum(
            1
            for assignment in assignments
            if assignment["start_column"] <= column <= assignment["end_column"]
        )
        if count > max_visible_rows:
            overflow_by_column[column] = count - max_visible_rows

    return {
        "assignments": assignments,
        "row_count": len(occupancy),
        "overflow_by_column": overflow_by_column,
    }


def visible_rows(
    layout: BandLayout, expanded: bool, max_visible_rows: int = MAX_VISIBLE_ROWS
) -> list[BandAssignment]:
    """Assignments to paint for the collapsed or expanded band."""
    if expanded:
        return list(layout["assignments"])
    return [
        assignment
        for assignment in layout["assignments"]
        if assignment["row"] < max_visible_rows
    ]


def _duration(event: AllDayEvent) -> int:
    start, end = normalized_span(event["start"], event["end"])
    return end - start
