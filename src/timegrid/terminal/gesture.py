# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import Annotated, Any, Optional, cast

import pendulum
import typer
from rich import box
from rich.console import Console
from rich.table import Table
from yaml import YAMLError, load

try:
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Loader  # type: ignore[assignment]

from timegrid.model.drag import Effect, GridGeometry, PointerSample, ResizeEdge
from timegrid.model.entity_id import short_entity_id
from timegrid.model.zoom import get_zoom_state
from timegrid.repository.configuration import CONFIGURATION_REPO
from timegrid.repository.event import EVENT_REPO, EventNotFoundError
from timegrid.service.interaction import GridInteraction
from timegrid.service.visual_day import visible_days
from timegrid.terminal.custom_typer import AliasedTyperGroup
from timegrid.terminal.parse import configured_timezone, parse_date
from timegrid.terminal.simulation import QueuedFrameScheduler, SimulatedViewport
from timegrid.time import instant_to_display_str

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)

STEP_KINDS = ["press", "move", "release", "cancel", "frames", "zoom"]


def _load_script(file: Path) -> dict[str, Any]:
    try:
        script = load(file.read_text(), Loader=Loader)
    except (OSError, YAMLError) as e:
        raise typer.BadParameter(f"Cannot read gesture script: {e}")
    if not isinstance(script, dict) or not isinstance(script.get("steps"), list):
        raise typer.BadParameter("Gesture script needs a 'steps' list")
    return script


def _sample(step: Any, viewport: SimulatedViewport) -> PointerSample:
    if not isinstance(step, dict) or "x" not in step or "y" not in step:
        raise typer.BadParameter(f"Pointer step needs x and y, got {step!r}")
    return {
        "x": float(step["x"]),
        "y": float(step["y"]),
        "scroll_top": viewport.scroll_top,
    }


def _describe(effect: Effect, tz: pendulum.FixedTimezone) -> tuple[str, str, str]:
    if effect["kind"] == "preview":
        if effect["all_day_drop_target"]:
            detail = f"all-day drop target, column {effect['column']}"
        else:
            detail = (
                f"column {effect['column']}, "
                f"{effect['start_minutes']:g}-{effect['end_minutes']:g} min"
            )
        target = effect["event_id"]
        return "preview", short_entity_id(target) if target else "", detail

    proposal = effect["proposal"]
    span = (
        f"{instant_to_display_str(proposal['start'], tz)} → "
        f"{instant_to_display_str(proposal['end'], tz)}"
        f"{' (all-day)' if proposal['all_day'] else ''}"
    )
    if effect["kind"] == "create":
        return "create", "", span
    kind = effect["kind"]
    if effect["kind"] == "update" and effect["final"]:
        kind = "update (final)"
    return kind, short_entity_id(effect["event_id"]), span


@app.command("replay, r", no_args_is_help=True)
def replay(
    file: Annotated[
        Path, typer.Argument(exists=True, dir_okay=False, help="YAML gesture script")
    ],
    dry_run: Annotated[
        bool, typer.Option("--dry-run", help="do not save the resulting events")
    ] = False,
) -> None:
    """Replay a scripted pointer gesture against the stored events."""
    script = _load_script(file)
    config = CONFIGURATION_REPO.get_config()
    tz = configured_timezone()

    first_day = (
        parse_date(str(script["start"])) if script.get("start") is not None else None
    )
    if first_day is None:
        first_day = pendulum.now(tz).date()
    days = visible_days(first_day, int(script.get("days") or config["day_count"]))

    hour_height = float(script.get("hour_height_px") or config["hour_height_px"])
    viewport = SimulatedViewport(
        float(script.get("viewport_height", 600)),
        hour_height,
        float(script.get("scroll_top", 0)),
    )
    scheduler = QueuedFrameScheduler()
    geometry: GridGeometry = {
        "days": days,
        "canvas_width": float(script.get("canvas_width", 100 * len(days))),
        "grid_top": float(script.get("grid_top", 0)),
        "band_top": float(script.get("band_top", -1)),
        "band_bottom": float(script.get("band_bottom", -1)),
        "hour_height_px": hour_height,
        "day_start_offset_minutes": int(
            script.get("day_start_minutes", config["day_start_minutes"])
        ),
        "utc_offset_hours": config["utc_offset_hours"],
        "snap_minutes": script.get("snap_minutes"),
    }
    interaction = GridInteraction(
        EVENT_REPO,
        viewport,
        scheduler,
        geometry,
        get_zoom_state(hour_height),
        config["auto_scroll_threshold_px"],
        config["auto_scroll_speed_px"],
    )

    table = Table(box=box.SIMPLE, title=f"gesture {file.name}")
    table.add_column("step")
    table.add_column("effect")
    table.add_column("event")
    table.add_column("detail")

    for index, raw_step in enumerate(script["steps"], start=1):
        if not isinstance(raw_step, dict) or len(raw_step) != 1:
            raise typer.BadParameter(f"Step {index} must have exactly one action")
        kind, step = next(iter(raw_step.items()))
        if kind not in STEP_KINDS:
            raise typer.BadParameter(
                f"Step {index}: unknown action '{kind}', expected one of {', '.join(STEP_KINDS)}"
            )

        effects: list[Effect] = []
        label = f"{index} {kind}"
        if kind == "press":
            sample = _sample(step, viewport)
            event_ref: Optional[str] = step.get("event")
            if event_ref is None:
                effects = interaction.press_canvas(sample)
            else:
                try:
                    event_id = EVENT_REPO.resolve_id(str(event_ref))
                except EventNotFoundError:
                    raise typer.BadParameter(
                        f"Step {index}: no single event matches id '{event_ref}'"
                    )
                edge = cast(Optional[ResizeEdge], step.get("edge"))
                if edge not in (None, "top", "bottom"):
                    raise typer.BadParameter(f"Step {index}: edge must be top or bottom")
                effects = interaction.press_event(event_id, sample, edge)
        elif kind == "move":
            effects = interaction.move(_sample(step, viewport))
        elif kind == "release":
            effects = interaction.release(_sample(step, viewport))
        elif kind == "cancel":
            effects = interaction.cancel()
        elif kind == "frames":
            count = scheduler.run_frames(int(step))
            label = f"{index} frames ×{count}"
        elif kind == "zoom":
            if not isinstance(step, dict):
                raise typer.BadParameter(f"Step {index}: zoom needs steps and pointer_y")
            interaction.wheel_zoom(
                float(step.get("steps", 0)), float(step.get("pointer_y", 0))
            )
            viewport.hour_height_px = interaction.zoom.hour_height_px
            scheduler.run_frames()
            label = f"{index} zoom {interaction.zoom.hour_height_px:.1f}px/h"

        if not effects:
            table.add_row(label, "", "", "")
        for effect in effects:
            table.add_row(label, *_describe(effect, tz))

    if dry_run:
        EVENT_REPO.reset()
    else:
        EVENT_REPO.flush()

    table.caption = f"scroll_top {viewport.scroll_top:.1f}"
    console = Console()
    console.print(table)
