# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import pendulum
import typer

from timegrid.repository.configuration import CONFIGURATION_REPO
from timegrid.repository.event import EVENT_REPO
from timegrid.service.visual_day import visible_days, visual_day_of_instant
from timegrid.terminal.custom_typer import AliasedTyperGroup
from timegrid.terminal.parse import configured_timezone, parse_date
from timegrid.terminal.validate import validate_day_count
from timegrid.time import SystemClock
from timegrid.view import state as view_state
from timegrid.view.band import band_view
from timegrid.view.day import day_view
from timegrid.view.header import header

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)

CLOCK = SystemClock()

DATE_HELP = "valid inputs: YYYY-MM-DD, today, yesterday, tomorrow, or day offset like 1, -1"


def _first_day(date: Optional[str]) -> pendulum.Date:
    parsed = parse_date(date)
    if parsed is not None:
        return parsed
    config = CONFIGURATION_REPO.get_config()
    # Before the day start the current visual day is still yesterday's
    return visual_day_of_instant(
        CLOCK.now_ms(), config["day_start_minutes"], configured_timezone()
    )


@app.command("day, d")
def day(
    date: Annotated[Optional[str], typer.Argument(help=DATE_HELP)] = None,
    expand: Annotated[
        bool, typer.Option("--expand", "-x", help="show every all-day row")
    ] = False,
) -> None:
    """Show the all-day band and the timed-event lanes of one visual day."""
    config = CONFIGURATION_REPO.get_config()
    tz = configured_timezone()
    first_day = _first_day(date)
    events = EVENT_REPO.get_all_events()
    if expand:
        view_state.set_expand_all_day(True)

    header(config["utc_offset_hours"], "day")
    band_view(
        events,
        [first_day],
        tz,
        config["max_visible_all_day_rows"],
        view_state.get_expand_all_day(),
    )
    day_view(
        events,
        first_day,
        config["day_start_minutes"],
        tz,
        config["use_24_hour"],
        CLOCK,
        config["hour_height_px"],
    )


@app.command("days, ds")
def days(
    start: Annotated[Optional[str], typer.Argument(help=DATE_HELP)] = None,
    count: Annotated[
        Optional[int],
        typer.Option("--count", "-n", callback=validate_day_count),
    ] = None,
    expand: Annotated[
        bool, typer.Option("--expand", "-x", help="show every all-day row")
    ] = False,
) -> None:
    """Show the all-day band across several days, then each day's lanes."""
    config = CONFIGURATION_REPO.get_config()
    tz = configured_timezone()
    shown_days = visible_days(_first_day(start), count or config["day_count"])
    events = EVENT_REPO.get_all_events()
    if expand:
        view_state.set_expand_all_day(True)

    header(config["utc_offset_hours"], f"{len(shown_days)} days")
    band_view(
        events,
        shown_days,
        tz,
        config["max_visible_all_day_rows"],
        view_state.get_expand_all_day(),
    )
    for shown_day in shown_days:
        day_view(
            events,
            shown_day,
            config["day_start_minutes"],
            tz,
            config["use_24_hour"],
            CLOCK,
            config["hour_height_px"],
        )
