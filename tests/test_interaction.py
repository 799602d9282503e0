# SPDX-License-Identifier: MIT

from conftest import (
    MONDAY,
    FakeViewport,
    InMemoryEventStore,
    ManualFrameScheduler,
    at,
    make_geometry,
    timed_event,
)

from timegrid.model.zoom import get_zoom_state
from timegrid.service.interaction import GridInteraction


def make_interaction(store: InMemoryEventStore):  # type: ignore[no-untyped-def]
    viewport = FakeViewport(viewport_height=600, content_height=24 * 64, scroll_top=0)
    scheduler = ManualFrameScheduler()
    interaction = GridInteraction(
        store, viewport, scheduler, make_geometry(), get_zoom_state(64)
    )
    return interaction, viewport, scheduler


def test_auto_scroll_reapplies_the_last_sample() -> None:
    store = InMemoryEventStore([timed_event("e", at(MONDAY, 9), at(MONDAY, 10))])
    interaction, viewport, scheduler = make_interaction(store)

    # y=576 lies within 40px of the bottom of a 600px viewport
    interaction.press_event("e", {"x": 50, "y": 576, "scroll_top": 0})
    scheduler.step()
    assert viewport.scroll_top == 10
    assert store.events["e"]["start"] == at(MONDAY, 9, 15)

    scheduler.step(2)
    assert viewport.scroll_top == 30
    assert store.events["e"]["start"] == at(MONDAY, 9, 30)

    effects = interaction.release({"x": 50, "y": 576, "scroll_top": viewport.scroll_top})
    assert effects[0]["kind"] == "update"
    assert effects[0]["final"] is True
    assert effects[0]["proposal"]["start"] == at(MONDAY, 9, 30)
    assert scheduler.pending == {}


def test_cancel_stops_auto_scroll_and_reverts() -> None:
    store = InMemoryEventStore([timed_event("e", at(MONDAY, 9), at(MONDAY, 10))])
    interaction, viewport, scheduler = make_interaction(store)

    interaction.press_event("e", {"x": 50, "y": 576, "scroll_top": 0})
    scheduler.step(2)
    interaction.cancel()
    scheduler.step(2)

    assert viewport.scroll_top == 20
    assert store.events["e"]["start"] == at(MONDAY, 9)
    assert interaction.drag.session is None


def test_zoom_updates_the_drag_scale() -> None:
    store = InMemoryEventStore()
    interaction, _, _ = make_interaction(store)

    assert interaction.wheel_zoom(2, 300)

    assert interaction.drag.geometry["hour_height_px"] == interaction.zoom.hour_height_px
    assert interaction.zoom.hour_height_px > 64


def test_press_on_empty_grid_starts_create_and_auto_scroll() -> None:
    store = InMemoryEventStore()
    interaction, _, scheduler = make_interaction(store)

    effects = interaction.press_canvas({"x": 50, "y": 300, "scroll_top": 0})

    assert effects[0]["kind"] == "preview"
    assert interaction.auto_scroll.is_active
    assert len(scheduler.pending) == 1


def test_zoom_during_drag_keeps_the_event_under_the_pointer() -> None:
    store = InMemoryEventStore([timed_event("e", at(MONDAY, 9), at(MONDAY, 10))])
    interaction, viewport, scheduler = make_interaction(store)
    viewport.scroll_top = 276

    # viewport y=300 plus 276px of scroll is 576px, 09:00 at 64px/h
    interaction.press_event("e", {"x": 50, "y": 300, "scroll_top": 276})
    assert interaction.wheel_zoom(1, 300)
    scheduler.step()
    new_height = interaction.zoom.hour_height_px
    assert viewport.scroll_top != 276

    effects = interaction.move({"x": 50, "y": 300, "scroll_top": viewport.scroll_top})
    assert effects[0]["proposal"]["start"] == at(MONDAY, 9)
    assert store.events["e"]["start"] == at(MONDAY, 9)

    # one hour of travel at the new scale moves the event by one hour
    interaction.move(
        {"x": 50, "y": 300 + new_height, "scroll_top": viewport.scroll_top}
    )
    assert store.events["e"]["start"] == at(MONDAY, 10)
    assert store.events["e"]["end"] == at(MONDAY, 11)
