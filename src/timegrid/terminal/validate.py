# SPDX-License-Identifier: MIT

from typing import Optional

import typer

from timegrid.color import COLOR_PRIORITY
from timegrid.configuration import MAX_DAY_COUNT, MIN_DAY_COUNT
from timegrid.time import MAX_UTC_OFFSET_HOURS, MIN_UTC_OFFSET_HOURS


def validate_color(color: Optional[str]) -> Optional[str]:
    if color is None:
        return None
    if color not in COLOR_PRIORITY:
        raise typer.BadParameter(
            f"Color must be one of {', '.join(COLOR_PRIORITY)}, got '{color}'"
        )
    return color


def validate_utc_offset(hours: Optional[float]) -> Optional[float]:
    if hours is None:
        return None
    if not (MIN_UTC_OFFSET_HOURS <= hours <= MAX_UTC_OFFSET_HOURS):
        raise typer.BadParameter(
            f"UTC offset must be between {MIN_UTC_OFFSET_HOURS:g} and {MAX_UTC_OFFSET_HOURS:g}"
        )
    return hours


def validate_day_count(count: Optional[int]) -> Optional[int]:
    if count is None:
        return None
    if not (MIN_DAY_COUNT <= count <= MAX_DAY_COUNT):
        raise typer.BadParameter(
            f"Day count must be between {MIN_DAY_COUNT} and {MAX_DAY_COUNT} (inclusive)"
        )
    return count
