# SPDX-License-Identifier: MIT

from typing import Callable

from timegrid.time import MINUTES_PER_DAY


class SimulatedViewport:
    """Scrollable viewport over a day canvas, for replaying input offline."""

    def __init__(
        self, viewport_height: float, hour_height_px: float, scroll_top: float = 0.0
    ) -> None:
        self._viewport_height = viewport_height
        self.hour_height_px = hour_height_px
        self._scroll_top = 0.0
        self.scroll_to(scroll_top)

    @property
    def scroll_top(self) -> float:
        return self._scroll_top

    @property
    def viewport_height(self) -> float:
        return self._viewport_height

    @property
    def content_height(self) -> float:
        return MINUTES_PER_DAY / 60 * self.hour_height_px

    def scroll_to(self, scroll_top: float) -> None:
        max_scroll = max(0.0, self.content_height - self._viewport_height)
        self._scroll_top = max(0.0, min(max_scroll, scroll_top))


class QueuedFrameScheduler:
    """Frame callbacks run only when run_frames() is called."""

    def __init__(self) -> None:
        self._next_handle = 0
        self._pending: dict[int, Callable[[], None]] = {}

    @property
    def pending(self) -> int:
        return len(self._pending)

    def request_frame(self, callback: Callable[[], None]) -> int:
        self._next_handle += 1
        self._pending[self._next_handle] = callback
        return self._next_handle

    def cancel_frame(self, handle: int) -> None:
        self._pending.pop(handle, None)

    def run_frames(self, count: int = 1) -> int:
        """Run up to count frames; returns how many had callbacks queued."""
        ran = 0
        for _ in range(count):
            if not self._pending:
                break
            callbacks = list(self._pending.values())
            self._pending.clear()
            for callback in callbacks:
                callback()
            ran += 1
        return ran
