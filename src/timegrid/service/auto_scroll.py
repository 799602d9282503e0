# SPDX-License-Identifier: MIT

import logging
from typing import Any, Callable, Optional

from timegrid.model.collaborator import FrameScheduler, Viewport

logger = logging.getLogger(__name__)

DEFAULT_THRESHOLD_PX = 40.0
DEFAULT_SPEED_PX = 10.0


class AutoScrollController:
    """
    Scrolls the viewport while a drag pointer rests near its top or bottom.

    Each frame moves a fixed distance, clamped to the scrollable range, and
    reports the new scroll offset through on_scroll so the active drag can
    re-evaluate its last pointer sample.
    """

    def __init__(
        self,
        viewport: Viewport,
        scheduler: FrameScheduler,
        threshold_px: float = DEFAULT_THRESHOLD_PX,
        speed_px: float = DEFAULT_SPEED_PX,
        on_scroll: Optional[Callable[[float], None]] = None,
    ) -> None:
        self._viewport = viewport
        self._scheduler = scheduler
        self._threshold_px = threshold_px
        self._speed_px = speed_px
        self._on_scroll = on_scroll
        self._pointer_y: Optional[float] = None
        self._handle: Any = None
        self._active = False

    @property
    def is_active(self) -> bool:
        return self._active

    def start(self) -> None:
        if self._active:
            return
        self._active = True
        self._request()

    def update_pointer(self, pointer_y: float) -> None:
        """Track the pointer's y position relative to the viewport top."""
        self._pointer_y = pointer_y

    def stop(self) -> None:
        self._active = False
        self._pointer_y = None
        if self._handle is not None:
            self._scheduler.cancel_frame(self._handle)
            self._handle = None

    def direction(self) -> int:
        if self._pointer_y is None:
            return 0
        if self._pointer_y < self._threshold_px:
            return -1
        if self._pointer_y > self._viewport.viewport_height - self._threshold_px:
            return 1
        return 0

    def _request(self) -> None:
        self._handle = self._scheduler.request_frame(self._on_frame)

    def _on_frame(self) -> None:
        self._handle = None
        if not self._active:
            return

        direction = self.direction()
        if direction != 0:
            max_scroll = max(
                0.0, self._viewport.content_height - self._viewport.viewport_height
            )
            current = self._viewport.scroll_top
            scroll_top = max(0.0, min(max_scroll, current + direction * self._speed_px))
            if scroll_top != current:
                self._viewport.scroll_to(scroll_top)
                logger.debug("auto-scroll to %.1f px", scroll_top)
                if self._on_scroll is not None:
                    self._on_scroll(scroll_top)

        self._request()
