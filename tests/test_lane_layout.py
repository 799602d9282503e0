# SPDX-License-Identifier: MIT

import random

from conftest import MONDAY, UTC, all_day_event, at, timed_event

from timegrid.model.layout import TimedSpan
from timegrid.service.lane_layout import lay_out_day, lay_out_lanes


def span(event_id: str, start: float, end: float) -> TimedSpan:
    return {"event_id": event_id, "start": start, "end": end}


def test_overlapping_pair_and_separate_event() -> None:
    events = [
        timed_event("a", at(MONDAY, 9), at(MONDAY, 10)),
        timed_event("b", at(MONDAY, 9, 30), at(MONDAY, 10, 30)),
        timed_event("c", at(MONDAY, 11), at(MONDAY, 12)),
    ]

    lanes = lay_out_day(events, MONDAY, 0, UTC)

    assert (lanes["a"]["lane_index"], lanes["a"]["lane_count"]) == (0, 2)
    assert (lanes["b"]["lane_index"], lanes["b"]["lane_count"]) == (1, 2)
    assert (lanes["c"]["lane_index"], lanes["c"]["lane_count"]) == (0, 1)
    assert lanes["b"]["left_percent"] == 50
    assert lanes["b"]["width_percent"] == 50
    assert lanes["c"]["width_percent"] == 100


def test_touching_events_share_a_lane() -> None:
    lanes = lay_out_lanes([span("a", 60, 120), span("b", 120, 180)])

    assert lanes["a"]["lane_index"] == lanes["b"]["lane_index"] == 0
    assert lanes["a"]["lane_count"] == lanes["b"]["lane_count"] == 1


def test_lane_count_is_max_concurrency_not_cluster_size() -> None:
    # a overlaps b and c, but b and c do not overlap each other
    lanes = lay_out_lanes([span("a", 0, 300), span("b", 0, 100), span("c", 100, 200)])

    assert lanes["a"]["lane_count"] == 2
    assert lanes["b"]["lane_index"] == lanes["c"]["lane_index"]


def test_ties_are_broken_by_end_then_id() -> None:
    lanes = lay_out_lanes([span("z", 0, 60), span("y", 0, 60), span("x", 0, 30)])

    assert lanes["x"]["lane_index"] == 0
    assert lanes["y"]["lane_index"] == 1
    assert lanes["z"]["lane_index"] == 2


def test_malformed_interval_becomes_zero_duration() -> None:
    lanes = lay_out_lanes([span("bad", 120, 60)])

    assert lanes["bad"]["lane_count"] == 1
    assert lanes["bad"]["width_percent"] == 100


def test_zero_duration_inside_another_event_gets_its_own_lane() -> None:
    lanes = lay_out_lanes([span("long", 0, 120), span("point", 60, 60)])

    assert lanes["point"]["lane_index"] == 1
    assert lanes["long"]["lane_count"] == 2


def test_empty_input() -> None:
    assert lay_out_lanes([]) == {}


def test_day_selects_events_by_visual_day_start() -> None:
    events = [
        # 03:00 on Tuesday belongs to Monday's visual day when days start at 05:00
        timed_event("late", at(MONDAY.add(days=1), 3), at(MONDAY.add(days=1), 4)),
        timed_event("early", at(MONDAY, 4), at(MONDAY, 4, 30)),
        timed_event("day", at(MONDAY, 9), at(MONDAY, 10)),
        all_day_event("banner", MONDAY, MONDAY),
    ]

    lanes = lay_out_day(events, MONDAY, 300, UTC)

    assert set(lanes) == {"late", "day"}


def test_lanes_never_overlap_and_count_matches_concurrency() -> None:
    rng = random.Random(1234)
    for _ in range(200):
        spans = []
        for index in range(rng.randint(1, 25)):
            start = rng.randrange(0, 1380)
            spans.append(span(f"e{index}", start, start + rng.randint(5, 240)))

        lanes = lay_out_lanes(spans)

        by_id = {s["event_id"]: s for s in spans}
        for first in spans:
            for second in spans:
                if first is second:
                    continue
                overlap = first["start"] < second["end"] and second["start"] < first["end"]
                if overlap:
                    assert (
                        lanes[first["event_id"]]["lane_index"]
                        != lanes[second["event_id"]]["lane_index"]
                    )
                    assert (
                        lanes[first["event_id"]]["lane_count"]
                        == lanes[second["event_id"]]["lane_count"]
                    )

        for event_id, assignment in lanes.items():
            component = _component(event_id, spans)
            concurrency = max(
                sum(1 for s in component if s["start"] <= t["start"] < s["end"])
                for t in component
            )
            assert assignment["lane_count"] == concurrency
            assert assignment["lane_index"] < assignment["lane_count"]
            assert by_id[event_id]["start"] <= by_id[event_id]["end"]


def _component(event_id: str, spans: list[TimedSpan]) -> list[TimedSpan]:
    members = {event_id}
    changed = True
    while changed:
        changed = False
        for candidate in spans:
            if candidate["event_id"] in members:
                continue
            for member in spans:
                if member["event_id"] in members and (
                    candidate["start"] < member["end"] and member["start"] < candidate["end"]
                ):
                    members.add(candidate["event_id"])
                    changed = True
                    break
    return [s for s in spans if s["event_id"] in members]
