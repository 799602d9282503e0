# SPDX-License-Identifier: MIT

import pendulum
from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from timegrid.color import color_style
from timegrid.model.entity_id import short_entity_id
from timegrid.model.event import Event, is_all_day
from timegrid.service.visual_day import all_day_date_range
from timegrid.time import date_to_display_str, instant_to_display_str


def _span_text(event: Event, tz: pendulum.FixedTimezone) -> tuple[str, str]:
    if is_all_day(event):
        first, last = all_day_date_range(event, tz)
        return date_to_display_str(first), date_to_display_str(last)
    return instant_to_display_str(event["start"], tz), instant_to_display_str(
        event["end"], tz
    )


def events_view(
    events: list[Event], tz: pendulum.FixedTimezone, use_color: bool = True
) -> None:
    events_table = Table(box=box.SIMPLE)
    for column in ["id", "title", "start", "end", "all_day", "done"]:
        events_table.add_column(column)

    for event in sorted(events, key=lambda event: (event["start"], event["id"])):
        start, end = _span_text(event, tz)
        title = escape(event["title"] or "(untitled)")
        if use_color:
            style = color_style(event["color"], event["completed"])
            title = f"[{style}]{title}[/{style}]"
        events_table.add_row(
            short_entity_id(event["id"]),
            title,
            start,
            end,
            "✓" if event["all_day"] else "",
            "✓" if event["completed"] else "",
        )

    console = Console()
    console.print(events_table)


def single_event_view(event: Event, tz: pendulum.FixedTimezone) -> None:
    event_table = Table(box=box.SIMPLE)
    event_table.add_column("property")
    event_table.add_column("value")

    start, end = _span_text(event, tz)
    event_table.add_row("id", event["id"])
    title = event["title"]
    event_table.add_row("title", escape(title) if title is not None else None)
    event_table.add_row("color", event["color"])
    event_table.add_row("start", start)
    event_table.add_row("end", end)
    event_table.add_row("all_day", str(event["all_day"]))
    event_table.add_row("completed", str(event["completed"]))
    event_table.add_row("created", instant_to_display_str(event["created"], tz))
    event_table.add_row("updated", instant_to_display_str(event["updated"], tz))

    console = Console()
    console.print(event_table)
