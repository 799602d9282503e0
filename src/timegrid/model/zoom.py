# SPDX-License-Identifier: MIT

from typing import TypedDict

MIN_HOUR_HEIGHT_PX = 32.0
MAX_HOUR_HEIGHT_PX = 800.0
DEFAULT_HOUR_HEIGHT_PX = 64.0
ZOOM_FACTOR = 1.15


class ZoomState(TypedDict):
    hour_height_px: float


def get_zoom_state(hour_height_px: float = DEFAULT_HOUR_HEIGHT_PX) -> ZoomState:
    return {
        "hour_height_px": max(
            MIN_HOUR_HEIGHT_PX, min(MAX_HOUR_HEIGHT_PX, float(hour_height_px))
        )
    }
