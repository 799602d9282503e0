# SPDX-License-Identifier: MIT

import datetime
from typing import Optional

import pendulum
from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from timegrid.color import color_style
from timegrid.model.collaborator import Clock
from timegrid.model.entity_id import short_entity_id
from timegrid.model.event import Event, TimedEvent
from timegrid.model.layout import LaneAssignment
from timegrid.service.coordinate import (
    clamp_minutes,
    time_indicator_offset,
    visual_to_clock_minutes,
)
from timegrid.service.lane_layout import lay_out_day
from timegrid.service.snap import round_half_away_from_zero
from timegrid.service.visual_day import (
    belongs_to_visual_day,
    timed_events_for_visual_day,
    visual_day_window,
)
from timegrid.time import MS_PER_MINUTE, date_to_display_str, format_minutes

LANE_BAR_WIDTH = 12


def lane_bar(assignment: LaneAssignment, width: int = LANE_BAR_WIDTH) -> str:
    """Draw the horizontal slot of an event within its day column."""
    left = round_half_away_from_zero(assignment["left_percent"] * width / 100)
    span = max(1, round_half_away_from_zero(assignment["width_percent"] * width / 100))
    left = min(left, width - 1)
    span = min(span, width - left)
    return "·" * left + "█" * span + "·" * (width - left - span)


def day_table(
    events: list[Event],
    date: datetime.date,
    day_start_offset_minutes: int,
    tz: pendulum.FixedTimezone,
    use_24_hour: bool = True,
    clock: Optional[Clock] = None,
    hour_height_px: float = 64.0,
) -> Table:
    window_start, _ = visual_day_window(date, day_start_offset_minutes, tz)
    lanes = lay_out_day(events, date, day_start_offset_minutes, tz)
    day_events: list[TimedEvent] = sorted(
        timed_events_for_visual_day(events, date, day_start_offset_minutes, tz),
        key=lambda event: (event["start"], lanes[event["id"]]["lane_index"]),
    )

    table = Table(box=box.SIMPLE, title=date_to_display_str(date))
    table.add_column("id")
    table.add_column("lanes", no_wrap=True)
    table.add_column("start")
    table.add_column("end")
    table.add_column("title")

    def display_time(instant: int) -> str:
        visual = clamp_minutes((instant - window_start) / MS_PER_MINUTE)
        return format_minutes(
            visual_to_clock_minutes(visual, day_start_offset_minutes), use_24_hour
        )

    for event in day_events:
        style = color_style(event["color"], event["completed"])
        table.add_row(
            short_entity_id(event["id"]),
            lane_bar(lanes[event["id"]]),
            display_time(event["start"]),
            display_time(event["end"]),
            f"[{style}]{escape(event['title'] or '(untitled)')}[/{style}]",
        )

    now = clock.now_ms() if clock is not None else None
    if now is not None and belongs_to_visual_day(
        now, date, day_start_offset_minutes, tz
    ):
        offset = time_indicator_offset(now, hour_height_px, day_start_offset_minutes, tz)
        table.caption = f"now {display_time(now)} at {offset:.0f}px"

    return table


def day_view(
    events: list[Event],
    date: datetime.date,
    day_start_offset_minutes: int,
    tz: pendulum.FixedTimezone,
    use_24_hour: bool = True,
    clock: Optional[Clock] = None,
    hour_height_px: float = 64.0,
) -> None:
    console = Console()
    console.print(
        day_table(
            events,
            date,
            day_start_offset_minutes,
            tz,
            use_24_hour,
            clock,
            hour_height_px,
        )
    )
