# SPDX-License-Identifier: MIT

from typing import Literal, Optional, TypeAlias, TypedDict, TypeGuard

from timegrid.model.entity_id import EntityId

# Instants are epoch milliseconds.
Instant: TypeAlias = int


class TimedEvent(TypedDict):
    id: EntityId
    title: Optional[str]
    start: Instant
    end: Instant
    all_day: Literal[False]
    color: Optional[str]
    completed: bool
    created: Instant
    updated: Instant


class AllDayEvent(TypedDict):
    id: EntityId
    title: Optional[str]
    start: Instant
    # Inclusive: the last millisecond of the last covered day.
    end: Instant
    all_day: Literal[True]
    color: Optional[str]
    completed: bool
    created: Instant
    updated: Instant


Event: TypeAlias = TimedEvent | AllDayEvent


class EventDraft(TypedDict):
    title: Optional[str]
    start: Instant
    end: Instant
    all_day: bool
    color: Optional[str]


class EventPatch(TypedDict, total=False):
    title: Optional[str]
    start: Instant
    end: Instant
    all_day: bool
    color: Optional[str]
    completed: bool


def is_all_day(event: Event) -> TypeGuard[AllDayEvent]:
    return event["all_day"] is True


def is_timed(event: Event) -> TypeGuard[TimedEvent]:
    return event["all_day"] is False


def normalized_span(start: Instant, end: Instant) -> tuple[Instant, Instant]:
    """Return (start, end) with a negative duration collapsed to zero."""
    if end < start:
        return start, start
    return start, end
