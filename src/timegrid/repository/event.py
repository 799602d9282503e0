# SPDX-License-Identifier: MIT

import logging
from copy import deepcopy
from typing import Any, Optional, cast

from yaml import dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from timegrid import configuration
from timegrid.model.entity_id import EntityId, generate_entity_id
from timegrid.model.event import Event, EventDraft, EventPatch
from timegrid.template.event import get_event_template
from timegrid.time import instant_from_iso_str, instant_to_iso_str, now_ms

logger = logging.getLogger(__name__)

_INSTANT_FIELDS = ["start", "end", "created", "updated"]


class EventNotFoundError(KeyError):
    pass


class EventRepository:
    """YAML-backed event store; writes are buffered until flush()."""

    def __init__(self) -> None:
        self._events: Optional[list[Event]] = None
        self.is_dirty = False

    @property
    def events(self) -> list[Event]:
        if self._events is None:
            self.__load_data()
        if self._events is None:
            raise ValueError()
        return self._events

    def __load_data(self) -> None:
        self._events = []
        if not configuration.DATA_EVENTS_PATH.is_file():
            return
        raw_data = load(configuration.DATA_EVENTS_PATH.read_text(), Loader=Loader)
        if raw_data is None:
            return
        if not isinstance(raw_data, dict) or not isinstance(
            raw_data.get("events", []), list
        ):
            raise ValueError(f"malformed event file {configuration.DATA_EVENTS_PATH}")
        for raw_event in raw_data.get("events") or []:
            self._events.append(self.__convert_event_for_deserialization(raw_event))

    def __save_data(self) -> None:
        serializable_events = [
            self.__convert_event_for_serialization(deepcopy(event))
            for event in self.events
        ]
        configuration.DATA_EVENTS_PATH.parent.mkdir(parents=True, exist_ok=True)
        configuration.DATA_EVENTS_PATH.write_text(
            dump({"events": serializable_events}, Dumper=Dumper)
        )

    def flush(self) -> bool:
        if self._events is not None and self.is_dirty:
            self.__save_data()
            self.is_dirty = False
            return True
        return False

    def reset(self) -> None:
        """Drop cached events so the next access reads the file."""
        self._events = None
        self.is_dirty = False

    def __convert_event_for_serialization(self, event: Event) -> dict[str, Any]:
        serializable_event = cast(dict[str, Any], event)
        for field in _INSTANT_FIELDS:
            serializable_event[field] = instant_to_iso_str(serializable_event[field])
        return serializable_event

    def __convert_event_for_deserialization(self, event: dict[str, Any]) -> Event:
        deserializable_event = event
        for field in _INSTANT_FIELDS:
            value = deserializable_event[field]
            if isinstance(value, str):
                deserializable_event[field] = instant_from_iso_str(value)
        deserializable_event["all_day"] = bool(deserializable_event.get("all_day"))
        deserializable_event.setdefault("completed", False)
        deserializable_event.setdefault("color", None)
        deserializable_event.setdefault("title", None)
        return cast(Event, deserializable_event)

    def __find(self, id: EntityId) -> Event:
        matching = [event for event in self.events if event["id"] == id]
        if len(matching) == 0:
            raise EventNotFoundError(id)
        return matching[0]

    def create_event(self, draft: EventDraft) -> EntityId:
        self.is_dirty = True

        event = get_event_template()
        event["id"] = generate_entity_id()
        event["title"] = draft["title"]
        event["start"] = draft["start"]
        event["end"] = draft["end"]
        event["all_day"] = draft["all_day"]  # type: ignore[typeddict-item]
        event["color"] = draft["color"]

        self.events.append(event)
        logger.debug("event %s created", event["id"])
        return event["id"]

    def update_event(self, id: EntityId, patch: EventPatch) -> None:
        event = self.__find(id)
        self.is_dirty = True

        event["updated"] = now_ms()
        if "title" in patch:
            event["title"] = patch["title"]
        if "start" in patch:
            event["start"] = patch["start"]
        if "end" in patch:
            event["end"] = patch["end"]
        if "all_day" in patch:
            event["all_day"] = patch["all_day"]  # type: ignore[typeddict-item]
        if "color" in patch:
            event["color"] = patch["color"]
        if "completed" in patch:
            event["completed"] = patch["completed"]

    def get_all_events(self) -> list[Event]:
        return deepcopy(self.events)

    def get_event(self, id: EntityId) -> Event:
        return deepcopy(self.__find(id))

    def resolve_id(self, id_or_prefix: str) -> EntityId:
        """Resolve a full id or an unambiguous id prefix."""
        matching = [
            event["id"] for event in self.events if event["id"].startswith(id_or_prefix)
        ]
        if id_or_prefix in matching:
            return id_or_prefix
        if len(matching) != 1:
            raise EventNotFoundError(id_or_prefix)
        return matching[0]


EVENT_REPO = EventRepository()
