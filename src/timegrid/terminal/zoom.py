# SPDX-License-Identifier: MIT

from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from timegrid.model.zoom import get_zoom_state
from timegrid.repository.configuration import CONFIGURATION_REPO
from timegrid.service.coordinate import pixel_to_minutes, visual_to_clock_minutes
from timegrid.service.snap import snap_granularity_minutes
from timegrid.service.zoom import ZoomController
from timegrid.terminal.simulation import QueuedFrameScheduler, SimulatedViewport
from timegrid.time import format_minutes


def zoom(
    steps: Annotated[
        float, typer.Argument(help="zoom steps, positive zooms in, negative out")
    ] = 0,
    pointer_y: Annotated[
        float,
        typer.Option("--pointer-y", "-y", help="pointer position within the viewport"),
    ] = 0,
    scroll_top: Annotated[float, typer.Option("--scroll-top", "-st", min=0)] = 0,
    viewport_height: Annotated[
        float, typer.Option("--viewport-height", "-vh", min=1)
    ] = 600,
    fit: Annotated[
        bool, typer.Option("--fit", help="raise the scale so 24 hours fill the viewport")
    ] = False,
) -> None:
    """Zoom the time grid around a pointer position and store the new scale."""
    config = CONFIGURATION_REPO.get_config()
    old_height = config["hour_height_px"]

    viewport = SimulatedViewport(viewport_height, old_height, scroll_top)
    scheduler = QueuedFrameScheduler()
    controller = ZoomController(get_zoom_state(old_height), viewport, scheduler)

    anchor_minutes = pixel_to_minutes(pointer_y + viewport.scroll_top, old_height)
    changed = controller.fit_to_viewport() if fit else False
    if steps != 0:
        changed = controller.zoom(steps, pointer_y) or changed
    viewport.hour_height_px = controller.hour_height_px
    scheduler.run_frames()

    if changed:
        CONFIGURATION_REPO.update_config(hour_height_px=controller.hour_height_px)
        CONFIGURATION_REPO.flush()

    table = Table()
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="magenta")
    table.add_row("hour_height_px", f"{old_height:g} → {controller.hour_height_px:.2f}")
    table.add_row(
        "snap_minutes", str(snap_granularity_minutes(controller.hour_height_px))
    )
    table.add_row(
        "anchor",
        format_minutes(
            visual_to_clock_minutes(anchor_minutes, config["day_start_minutes"]),
            config["use_24_hour"],
        ),
    )
    table.add_row("scroll_top", f"{viewport.scroll_top:.1f}")
    if not changed:
        table.caption = "scale unchanged"

    console = Console()
    console.print(table)
