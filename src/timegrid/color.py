# SPDX-License-Identifier: MIT

from typing import Optional

# Palette in priority order; the rank orders all-day banners.
COLOR_PRIORITY: dict[str, int] = {
    "red": 0,
    "orange": 1,
    "yellow": 2,
    "green": 3,
    "blue": 4,
    "purple": 5,
    "brown": 6,
    "default": 7,
}

# Rich styles used when rendering each palette color in the terminal
COLOR_STYLE: dict[str, str] = {
    "red": "red",
    "orange": "dark_orange",
    "yellow": "yellow",
    "green": "green",
    "blue": "blue",
    "purple": "purple",
    "brown": "tan",
    "default": "bright_black",
}

COMPLETED_EVENT_STYLE = "bright_black"


def color_priority_rank(color: Optional[str]) -> int:
    """Rank of a palette color; unknown or missing colors rank as default."""
    if color is None:
        return COLOR_PRIORITY["default"]
    return COLOR_PRIORITY.get(color, COLOR_PRIORITY["default"])


def color_style(color: Optional[str], completed: bool = False) -> str:
    if completed:
        return COMPLETED_EVENT_STYLE
    if color is None:
        return COLOR_STYLE["default"]
    return COLOR_STYLE.get(color, color)
