# SPDX-License-Identifier: MIT

import logging
from typing import Optional

from timegrid.model.collaborator import EventStore, FrameScheduler, Viewport
from timegrid.model.drag import Effect, GridGeometry, PointerSample, ResizeEdge
from timegrid.model.entity_id import EntityId
from timegrid.model.zoom import ZoomState
from timegrid.service.auto_scroll import (
    DEFAULT_SPEED_PX,
    DEFAULT_THRESHOLD_PX,
    AutoScrollController,
)
from timegrid.service.drag import DragController
from timegrid.service.zoom import ZoomController

logger = logging.getLogger(__name__)


class GridInteraction:
    """
    Wires the drag, zoom and auto-scroll controllers to one time grid.

    Auto-scroll runs for the lifetime of a drag session and re-applies the
    last pointer sample at the new scroll offset; zoom changes are pushed
    into the drag geometry so the next sample uses the new scale.
    """

    def __init__(
        self,
        store: EventStore,
        viewport: Viewport,
        scheduler: FrameScheduler,
        geometry: GridGeometry,
        zoom_state: ZoomState,
        auto_scroll_threshold_px: float = DEFAULT_THRESHOLD_PX,
        auto_scroll_speed_px: float = DEFAULT_SPEED_PX,
    ) -> None:
        self._viewport = viewport
        self.zoom = ZoomController(zoom_state, viewport, scheduler)
        geometry = geometry.copy()
        geometry["hour_height_px"] = self.zoom.hour_height_px
        self.drag = DragController(store, geometry)
        self.auto_scroll = AutoScrollController(
            viewport,
            scheduler,
            threshold_px=auto_scroll_threshold_px,
            speed_px=auto_scroll_speed_px,
            on_scroll=self._on_auto_scroll,
        )

    def press_canvas(self, sample: PointerSample) -> list[Effect]:
        return self._after_press(self.drag.press_canvas(sample), sample)

    def press_event(
        self,
        event_id: EntityId,
        sample: PointerSample,
        edge: Optional[ResizeEdge] = None,
    ) -> list[Effect]:
        return self._after_press(self.drag.press_event(event_id, sample, edge), sample)

    def press_all_day_event(
        self, event_id: EntityId, sample: PointerSample
    ) -> list[Effect]:
        return self._after_press(self.drag.press_all_day_event(event_id, sample), sample)

    def move(self, sample: PointerSample) -> list[Effect]:
        if self.drag.is_active:
            self.auto_scroll.update_pointer(self._viewport_y(sample))
        return self.drag.move(sample)

    def release(self, sample: PointerSample) -> list[Effect]:
        self.auto_scroll.stop()
        return self.drag.release(sample)

    def cancel(self) -> list[Effect]:
        self.auto_scroll.stop()
        return self.drag.cancel()

    def wheel_zoom(self, steps: float, pointer_y: float) -> bool:
        changed = self.zoom.zoom(steps, pointer_y)
        if changed:
            self._sync_hour_height()
        return changed

    def fit_to_viewport(self) -> bool:
        changed = self.zoom.fit_to_viewport()
        if changed:
            self._sync_hour_height()
        return changed

    def _after_press(self, effects: list[Effect], sample: PointerSample) -> list[Effect]:
        if self.drag.is_active:
            self.auto_scroll.update_pointer(self._viewport_y(sample))
            self.auto_scroll.start()
        return effects

    def _viewport_y(self, sample: PointerSample) -> float:
        return sample["y"] - self.drag.geometry["grid_top"]

    def _sync_hour_height(self) -> None:
        geometry = self.drag.geometry.copy()
        geometry["hour_height_px"] = self.zoom.hour_height_px
        self.drag.set_geometry(geometry)

    def _on_auto_scroll(self, scroll_top: float) -> None:
        self.drag.refresh(scroll_top)
