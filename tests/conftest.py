# SPDX-License-Identifier: MIT

from copy import deepcopy
from pathlib import Path
from typing import Any, Callable, Iterator, Optional

import pendulum
import pytest

from timegrid import configuration
from timegrid.initialize import initialize
from timegrid.model.drag import GridGeometry
from timegrid.model.entity_id import EntityId
from timegrid.model.event import AllDayEvent, Event, EventDraft, EventPatch, TimedEvent
from timegrid.repository.configuration import CONFIGURATION_REPO
from timegrid.repository.event import EVENT_REPO
from timegrid.time import (
    datetime_to_instant,
    end_of_day_instant,
    start_of_day_instant,
    utc_offset_timezone,
)

UTC = utc_offset_timezone(0)
MONDAY = pendulum.date(2024, 3, 4)


def at(day: pendulum.Date, hour: int, minute: int = 0) -> int:
    return datetime_to_instant(
        pendulum.datetime(day.year, day.month, day.day, hour, minute, tz=UTC)
    )


def timed_event(
    id: EntityId,
    start: int,
    end: int,
    color: Optional[str] = None,
    title: Optional[str] = None,
) -> TimedEvent:
    return {
        "id": id,
        "title": title or id,
        "start": start,
        "end": end,
        "all_day": False,
        "color": color,
        "completed": False,
        "created": start,
        "updated": start,
    }


def all_day_event(
    id: EntityId,
    first: pendulum.Date,
    last: pendulum.Date,
    color: Optional[str] = None,
) -> AllDayEvent:
    start = start_of_day_instant(first, UTC)
    return {
        "id": id,
        "title": id,
        "start": start,
        "end": end_of_day_instant(last, UTC),
        "all_day": True,
        "color": color,
        "completed": False,
        "created": start,
        "updated": start,
    }


class InMemoryEventStore:
    def __init__(self, events: Optional[list[Event]] = None) -> None:
        self.events: dict[EntityId, Event] = {
            event["id"]: deepcopy(event) for event in events or []
        }
        self.calls: list[tuple[str, Any]] = []
        self._created = 0

    def get_all_events(self) -> list[Event]:
        return deepcopy(list(self.events.values()))

    def create_event(self, draft: EventDraft) -> EntityId:
        self._created += 1
        id = f"new-{self._created}"
        event: dict[str, Any] = {
            **draft,
            "id": id,
            "completed": False,
            "created": draft["start"],
            "updated": draft["start"],
        }
        self.events[id] = event  # type: ignore[assignment]
        self.calls.append(("create", dict(draft)))
        return id

    def update_event(self, id: EntityId, patch: EventPatch) -> None:
        self.events[id].update(patch)  # type: ignore[typeddict-item]
        self.calls.append(("update", (id, dict(patch))))


class FakeViewport:
    def __init__(
        self,
        viewport_height: float = 600.0,
        content_height: float = 24 * 64.0,
        scroll_top: float = 0.0,
    ) -> None:
        self.viewport_height = viewport_height
        self.content_height = content_height
        self.scroll_top = scroll_top
        self.scroll_history: list[float] = []

    def scroll_to(self, scroll_top: float) -> None:
        self.scroll_top = scroll_top
        self.scroll_history.append(scroll_top)


class ManualFrameScheduler:
    def __init__(self) -> None:
        self.pending: dict[int, Callable[[], None]] = {}
        self._next = 0

    def request_frame(self, callback: Callable[[], None]) -> int:
        self._next += 1
        self.pending[self._next] = callback
        return self._next

    def cancel_frame(self, handle: int) -> None:
        self.pending.pop(handle, None)

    def step(self, frames: int = 1) -> None:
        for _ in range(frames):
            callbacks = list(self.pending.values())
            self.pending.clear()
            for callback in callbacks:
                callback()


def make_geometry(
    day_count: int = 3,
    hour_height_px: float = 64.0,
    grid_top: float = 0.0,
    band_top: float = -100.0,
    band_bottom: float = -50.0,
    day_start_offset_minutes: int = 0,
    snap_minutes: Optional[int] = None,
) -> GridGeometry:
    geometry: GridGeometry = {
        "days": [MONDAY.add(days=offset) for offset in range(day_count)],
        "canvas_width": 100.0 * day_count,
        "grid_top": grid_top,
        "band_top": band_top,
        "band_bottom": band_bottom,
        "hour_height_px": hour_height_px,
        "day_start_offset_minutes": day_start_offset_minutes,
        "utc_offset_hours": 0.0,
    }
    if snap_minutes is not None:
        geometry["snap_minutes"] = snap_minutes
    return geometry


@pytest.fixture
def viewport() -> FakeViewport:
    return FakeViewport()


@pytest.fixture
def scheduler() -> ManualFrameScheduler:
    return ManualFrameScheduler()


@pytest.fixture
def app_paths(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Path]:
    """Point configuration and data files at a temporary directory."""
    config_dir = tmp_path / "config"
    data_dir = tmp_path / "data"
    monkeypatch.setattr(configuration, "CONFIG_PATH", config_dir)
    monkeypatch.setattr(configuration, "APP_CONFIG_PATH", config_dir / "config.yaml")
    monkeypatch.setattr(configuration, "DATA_PATH", data_dir)
    monkeypatch.setattr(configuration, "DATA_EVENTS_PATH", data_dir / "events.yaml")
    CONFIGURATION_REPO.reset()
    EVENT_REPO.reset()
    initialize()
    yield tmp_path
    CONFIGURATION_REPO.reset()
    EVENT_REPO.reset()
