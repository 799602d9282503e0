# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

from timegrid import configuration
from timegrid.repository.configuration import CONFIGURATION_REPO
from timegrid.terminal.custom_typer import AliasedTyperGroup
from timegrid.terminal.parse import parse_time
from timegrid.terminal.validate import (
    validate_day_count,
    validate_utc_offset,
)
from timegrid.time import format_minutes, utc_offset_label

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


@app.command("view, v")
def view() -> None:
    """Display current configuration settings."""
    config = CONFIGURATION_REPO.get_config()

    console = Console()
    table = Table()
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="magenta")

    table.add_row(
        "day_start_minutes",
        f"{config['day_start_minutes']} ({format_minutes(config['day_start_minutes'], config['use_24_hour'])})",
    )
    table.add_row("hour_height_px", f"{config['hour_height_px']:g}")
    table.add_row(
        "utc_offset_hours",
        f"{config['utc_offset_hours']:g} ({utc_offset_label(config['utc_offset_hours'])})",
    )
    table.add_row("day_count", str(config["day_count"]))
    table.add_row(
        "use_24_hour",
        "✓ Enabled" if config["use_24_hour"] else "✗ Disabled",
    )
    table.add_row("max_visible_all_day_rows", str(config["max_visible_all_day_rows"]))
    table.add_row(
        "auto_scroll_threshold_px", f"{config['auto_scroll_threshold_px']:g}"
    )
    table.add_row("auto_scroll_speed_px", f"{config['auto_scroll_speed_px']:g}")
    table.add_row("data_path", str(configuration.DATA_PATH))

    console.print(table)


@app.command("set, s", no_args_is_help=True)
def set_config(
    day_start: Annotated[
        Optional[str],
        typer.Option(
            "--day-start",
            "-ds",
            help="time the visual day starts, e.g. 5:00 or 6am",
        ),
    ] = None,
    hour_height: Annotated[
        Optional[float], typer.Option("--hour-height", "-hh", min=1)
    ] = None,
    utc_offset: Annotated[
        Optional[float],
        typer.Option(
            "--utc-offset",
            "-u",
            callback=validate_utc_offset,
            help="hours from UTC, -12 to 14",
        ),
    ] = None,
    day_count: Annotated[
        Optional[int],
        typer.Option("--day-count", "-dc", callback=validate_day_count),
    ] = None,
    use_24_hour: Annotated[
        Optional[bool], typer.Option("--24-hour/--12-hour")
    ] = None,
    max_visible_all_day_rows: Annotated[
        Optional[int], typer.Option("--all-day-rows", min=1)
    ] = None,
    auto_scroll_threshold: Annotated[
        Optional[float], typer.Option("--auto-scroll-threshold", min=0)
    ] = None,
    auto_scroll_speed: Annotated[
        Optional[float], typer.Option("--auto-scroll-speed", min=0)
    ] = None,
    data_path: Annotated[Optional[str], typer.Option("--data-path")] = None,
    remove_data_path: Annotated[bool, typer.Option("--remove-data-path")] = False,
) -> None:
    """Update configuration settings."""
    day_start_minutes: Optional[int] = None
    time_of_day = parse_time(day_start)
    if time_of_day is not None:
        hour, minute = time_of_day
        day_start_minutes = hour * 60 + minute

    CONFIGURATION_REPO.update_config(
        day_start_minutes=day_start_minutes,
        hour_height_px=hour_height,
        utc_offset_hours=utc_offset,
        day_count=day_count,
        use_24_hour=use_24_hour,
        max_visible_all_day_rows=max_visible_all_day_rows,
        auto_scroll_threshold_px=auto_scroll_threshold,
        auto_scroll_speed_px=auto_scroll_speed,
        data_path=data_path,
        remove_data_path=remove_data_path,
    )
    CONFIGURATION_REPO.flush()
    view()
