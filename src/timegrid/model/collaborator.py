# SPDX-License-Identifier: MIT

from typing import Any, Callable, Protocol

from timegrid.model.entity_id import EntityId
from timegrid.model.event import Event, EventDraft, EventPatch


class EventStore(Protocol):
    def get_all_events(self) -> list[Event]: ...

    def create_event(self, draft: EventDraft) -> EntityId: ...

    def update_event(self, id: EntityId, patch: EventPatch) -> None: ...


class Viewport(Protocol):
    @property
    def scroll_top(self) -> float: ...

    @property
    def viewport_height(self) -> float: ...

    @property
    def content_height(self) -> float: ...

    def scroll_to(self, scroll_top: float) -> None: ...


class FrameScheduler(Protocol):
    def request_frame(self, callback: Callable[[], None]) -> Any: ...

    def cancel_frame(self, handle: Any) -> None: ...


class Clock(Protocol):
    def now_ms(self) -> int: ...
