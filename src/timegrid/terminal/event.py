# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import pendulum
import typer

from timegrid.model.event import EventPatch, is_all_day
from timegrid.repository.event import EVENT_REPO, EventNotFoundError
from timegrid.service.visual_day import all_day_date_range
from timegrid.terminal.custom_typer import AliasedTyperGroup
from timegrid.terminal.parse import configured_timezone, parse_date, parse_datetime
from timegrid.terminal.validate import validate_color
from timegrid.time import (
    MS_PER_MINUTE,
    datetime_to_instant,
    end_of_day_instant,
    instant_to_date,
    start_of_day_instant,
)
from timegrid.view.event import events_view, single_event_view

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)

DEFAULT_DURATION_MINUTES = 60

DATETIME_HELP = "valid inputs: YYYY-MM-DD HH:mm, YYYY-MM-DD, (H)H:mm, HHmm, 2:30pm, now, today, yesterday, tomorrow, or day offset like 1, -1"


def _resolve_id(id: str) -> str:
    try:
        return EVENT_REPO.resolve_id(id)
    except EventNotFoundError:
        raise typer.BadParameter(f"No single event matches id '{id}'")


@app.command("add, a", no_args_is_help=True)
def add(
    title: Annotated[str, typer.Argument(help="event title")],
    start: Annotated[
        Optional[pendulum.DateTime],
        typer.Option("--start", "-s", parser=parse_datetime, help=DATETIME_HELP),
    ] = None,
    end: Annotated[
        Optional[pendulum.DateTime],
        typer.Option("--end", "-e", parser=parse_datetime, help=DATETIME_HELP),
    ] = None,
    all_day: Annotated[bool, typer.Option("--all-day", "-a")] = False,
    color: Annotated[
        Optional[str], typer.Option("--color", "-col", callback=validate_color)
    ] = None,
) -> None:
    tz = configured_timezone()
    if start is None:
        start = pendulum.now(tz)

    if all_day:
        last_day = end.date() if end is not None else start.date()
        if last_day < start.date():
            raise typer.BadParameter("End must not be before start")
        start_instant = start_of_day_instant(start.date(), tz)
        end_instant = end_of_day_instant(last_day, tz)
    else:
        if end is None:
            end = start.add(minutes=DEFAULT_DURATION_MINUTES)
        if end < start:
            raise typer.BadParameter("End must not be before start")
        start_instant = datetime_to_instant(start)
        end_instant = datetime_to_instant(end)

    id = EVENT_REPO.create_event(
        {
            "title": title,
            "start": start_instant,
            "end": end_instant,
            "all_day": all_day,
            "color": color,
        }
    )
    EVENT_REPO.flush()
    single_event_view(EVENT_REPO.get_event(id), tz)


@app.command("list, ls")
def list_events(
    day: Annotated[
        Optional[str],
        typer.Option("--day", "-d", help="only events touching this calendar day"),
    ] = None,
    include_completed: Annotated[
        bool, typer.Option("--completed/--open", help="include completed events")
    ] = True,
) -> None:
    tz = configured_timezone()
    events = EVENT_REPO.get_all_events()

    selected_day = parse_date(day)
    if selected_day is not None:
        day_start = start_of_day_instant(selected_day, tz)
        day_end = end_of_day_instant(selected_day, tz)
        events = [
            event
            for event in events
            if event["start"] <= day_end and max(event["start"], event["end"]) >= day_start
        ]
    if not include_completed:
        events = [event for event in events if not event["completed"]]

    events_view(events, tz)


@app.command("modify, m", no_args_is_help=True)
def modify(
    id: str,
    title: Annotated[Optional[str], typer.Option("--title", "-t")] = None,
    start: Annotated[
        Optional[pendulum.DateTime],
        typer.Option("--start", "-s", parser=parse_datetime, help=DATETIME_HELP),
    ] = None,
    end: Annotated[
        Optional[pendulum.DateTime],
        typer.Option("--end", "-e", parser=parse_datetime, help=DATETIME_HELP),
    ] = None,
    all_day: Annotated[
        Optional[bool], typer.Option("--all-day/--timed", "-a/-T")
    ] = None,
    color: Annotated[
        Optional[str], typer.Option("--color", "-col", callback=validate_color)
    ] = None,
    remove_title: Annotated[bool, typer.Option("--remove-title", "-rt")] = False,
    remove_color: Annotated[bool, typer.Option("--remove-color", "-rcol")] = False,
) -> None:
    tz = configured_timezone()
    event_id = _resolve_id(id)
    event = EVENT_REPO.get_event(event_id)
    target_all_day = event["all_day"] if all_day is None else all_day

    patch: EventPatch = {}
    if title is not None:
        patch["title"] = title
    if remove_title:
        patch["title"] = None
    if color is not None:
        patch["color"] = color
    if remove_color:
        patch["color"] = None
    if all_day is not None:
        patch["all_day"] = all_day

    if target_all_day:
        if is_all_day(event):
            first_day, last_day = all_day_date_range(event, tz)
        else:
            first_day = last_day = instant_to_date(event["start"], tz)
        if start is not None:
            first_day = start.date()
            last_day = max(first_day, last_day)
        if end is not None:
            last_day = end.date()
        patch["start"] = start_of_day_instant(first_day, tz)
        patch["end"] = end_of_day_instant(last_day, tz)
    else:
        if start is not None:
            patch["start"] = datetime_to_instant(start)
        if end is not None:
            patch["end"] = datetime_to_instant(end)
        elif all_day is False:
            new_start = patch.get("start", event["start"])
            patch["end"] = new_start + DEFAULT_DURATION_MINUTES * MS_PER_MINUTE

    new_start = patch.get("start", event["start"])
    new_end = patch.get("end", event["end"])
    if new_end < new_start:
        raise typer.BadParameter("End must not be before start")

    EVENT_REPO.update_event(event_id, patch)
    EVENT_REPO.flush()
    single_event_view(EVENT_REPO.get_event(event_id), tz)


@app.command("complete, c", no_args_is_help=True)
def complete(
    id: str,
    undo: Annotated[bool, typer.Option("--undo", "-u")] = False,
) -> None:
    event_id = _resolve_id(id)
    EVENT_REPO.update_event(event_id, {"completed": not undo})
    EVENT_REPO.flush()
    single_event_view(EVENT_REPO.get_event(event_id), configured_timezone())
