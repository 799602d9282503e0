# SPDX-License-Identifier: MIT

import datetime

import pendulum
from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from timegrid.color import color_style
from timegrid.model.event import Event
from timegrid.service.band_layout import MAX_VISIBLE_ROWS, lay_out_band, visible_rows
from timegrid.time import as_date


def band_table(
    events: list[Event],
    days: list[datetime.date],
    tz: pendulum.FixedTimezone,
    max_visible_rows: int = MAX_VISIBLE_ROWS,
    expanded: bool = False,
) -> Table:
    """
    Render the all-day band: one column per day, one line per band row.

    Banners spanning several days print their title in the first column
    and a continuation mark in the others. While collapsed, columns with
    more events than max_visible_rows end with a "+N more" line.
    """
    layout = lay_out_band(events, days, tz, max_visible_rows=max_visible_rows)
    painted = visible_rows(layout, expanded, max_visible_rows)
    events_by_id = {event["id"]: event for event in events}

    table = Table(box=box.SIMPLE, title="all-day")
    for day in days:
        table.add_column(as_date(day).format("ddd DD"), no_wrap=True, overflow="ellipsis")

    row_count = max((assignment["row"] + 1 for assignment in painted), default=0)
    for row in range(row_count):
        cells = [""] * len(days)
        for assignment in painted:
            if assignment["row"] != row:
                continue
            event = events_by_id[assignment["event_id"]]
            style = color_style(event["color"], event["completed"])
            for column in range(assignment["start_column"], assignment["end_column"] + 1):
                text = escape(event["title"] or "(untitled)")
                if column != assignment["start_column"]:
                    text = "└─"
                cells[column] = f"[{style}]{text}[/{style}]"
        table.add_row(*cells)

    if not expanded and layout["overflow_by_column"]:
        table.add_row(
            *[
                f"+{layout['overflow_by_column'][column]} more"
                if column in layout["overflow_by_column"]
                else ""
                for column in range(len(days))
            ]
        )

    return table


def band_view(
    events: list[Event],
    days: list[datetime.date],
    tz: pendulum.FixedTimezone,
    max_visible_rows: int = MAX_VISIBLE_ROWS,
    expanded: bool = False,
) -> None:
    console = Console()
    console.print(band_table(events, days, tz, max_visible_rows, expanded))
