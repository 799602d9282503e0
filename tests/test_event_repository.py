# SPDX-License-Identifier: MIT

from pathlib import Path

import pytest
from conftest import MONDAY, at

from timegrid import configuration
from timegrid.repository.event import EVENT_REPO, EventNotFoundError


def test_create_update_and_reload(app_paths: Path) -> None:
    id = EVENT_REPO.create_event(
        {
            "title": "Standup",
            "start": at(MONDAY, 9),
            "end": at(MONDAY, 9, 15),
            "all_day": False,
            "color": "blue",
        }
    )
    EVENT_REPO.update_event(id, {"end": at(MONDAY, 9, 30), "completed": True})
    assert EVENT_REPO.flush()

    EVENT_REPO.reset()
    event = EVENT_REPO.get_event(id)

    assert event["title"] == "Standup"
    assert event["start"] == at(MONDAY, 9)
    assert event["end"] == at(MONDAY, 9, 30)
    assert event["completed"] is True
    assert event["all_day"] is False
    assert "events:" in configuration.DATA_EVENTS_PATH.read_text()


def test_flush_without_changes_writes_nothing(app_paths: Path) -> None:
    EVENT_REPO.get_all_events()

    assert EVENT_REPO.flush() is False


def test_unknown_event(app_paths: Path) -> None:
    with pytest.raises(EventNotFoundError):
        EVENT_REPO.update_event("missing", {"title": "x"})
    with pytest.raises(KeyError):
        EVENT_REPO.get_event("missing")


def test_resolve_id_by_prefix(app_paths: Path) -> None:
    id = EVENT_REPO.create_event(
        {
            "title": None,
            "start": at(MONDAY, 9),
            "end": at(MONDAY, 10),
            "all_day": False,
            "color": None,
        }
    )

    assert EVENT_REPO.resolve_id(id[:8]) == id
    assert EVENT_REPO.resolve_id(id) == id
    with pytest.raises(EventNotFoundError):
        EVENT_REPO.resolve_id("zzzz")


def test_returned_events_are_copies(app_paths: Path) -> None:
    id = EVENT_REPO.create_event(
        {
            "title": "a",
            "start": at(MONDAY, 9),
            "end": at(MONDAY, 10),
            "all_day": False,
            "color": None,
        }
    )

    EVENT_REPO.get_all_events()[0]["title"] = "changed"

    assert EVENT_REPO.get_event(id)["title"] == "a"


def test_malformed_file_raises(app_paths: Path) -> None:
    configuration.DATA_EVENTS_PATH.write_text("- just\n- a list\n")
    EVENT_REPO.reset()

    with pytest.raises(ValueError):
        EVENT_REPO.get_all_events()
