# SPDX-License-Identifier: MIT

from timegrid.model.event import TimedEvent
from timegrid.time import now_ms


def get_event_template() -> TimedEvent:
    now = now_ms()
    return {
        "id": "",
        "title": None,
        "start": now,
        "end": now,
        "all_day": False,
        "color": None,
        "completed": False,
        "created": now,
        "updated": now,
    }
