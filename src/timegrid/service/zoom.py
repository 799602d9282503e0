# SPDX-License-Identifier: MIT

import logging
from typing import Optional

from timegrid.model.collaborator import FrameScheduler, Viewport
from timegrid.model.zoom import (
    MAX_HOUR_HEIGHT_PX,
    MIN_HOUR_HEIGHT_PX,
    ZOOM_FACTOR,
    ZoomState,
    get_zoom_state,
)
from timegrid.service.coordinate import minutes_to_pixel, pixel_to_minutes
from timegrid.time import MINUTES_PER_DAY

logger = logging.getLogger(__name__)

MIN_ZOOM_CHANGE_PX = 0.1
HOURS_PER_DAY = MINUTES_PER_DAY // 60


class ZoomController:
    """
    Owns the hour height and keeps the time under the pointer fixed on zoom.

    The minimum hour height grows with the viewport so that one visual day
    never renders shorter than the viewport.
    """

    def __init__(
        self,
        state: ZoomState,
        viewport: Viewport,
        scheduler: Optional[FrameScheduler] = None,
    ) -> None:
        self._state = get_zoom_state(state["hour_height_px"])
        self._viewport = viewport
        self._scheduler = scheduler

    @property
    def state(self) -> ZoomState:
        return self._state

    @property
    def hour_height_px(self) -> float:
        return self._state["hour_height_px"]

    def minimum_hour_height(self) -> float:
        return max(MIN_HOUR_HEIGHT_PX, self._viewport.viewport_height / HOURS_PER_DAY)

    def zoom(self, steps: float, pointer_y: float) -> bool:
        """
        Scale by ZOOM_FACTOR per step around a viewport y position.

        Positive steps zoom in. Returns False when the clamped change is
        below MIN_ZOOM_CHANGE_PX and nothing was updated.
        """
        old_height = self._state["hour_height_px"]
        new_height = self._clamp(old_height * ZOOM_FACTOR**steps)
        if abs(new_height - old_height) < MIN_ZOOM_CHANGE_PX:
            return False

        anchor_minutes = pixel_to_minutes(
            pointer_y + self._viewport.scroll_top, old_height
        )
        self._state = {"hour_height_px": new_height}
        scroll_top = max(0.0, minutes_to_pixel(anchor_minutes, new_height) - pointer_y)
        logger.debug(
            "zoom %.2f -> %.2f px/h, anchor at %.1f min",
            old_height,
            new_height,
            anchor_minutes,
        )
        self._scroll_to(scroll_top)
        return True

    def fit_to_viewport(self) -> bool:
        minimum = self.minimum_hour_height()
        if self._state["hour_height_px"] >= minimum:
            return False
        self._state = {"hour_height_px": minimum}
        return True

    def set_hour_height(self, hour_height_px: float) -> None:
        self._state = {"hour_height_px": self._clamp(hour_height_px)}

    def _clamp(self, hour_height_px: float) -> float:
        return max(self.minimum_hour_height(), min(MAX_HOUR_HEIGHT_PX, hour_height_px))

    def _scroll_to(self, scroll_top: float) -> None:
        if self._scheduler is None:
            self._viewport.scroll_to(scroll_top)
            return
        viewport = self._viewport
        self._scheduler.request_frame(lambda: viewport.scroll_to(scroll_top))
