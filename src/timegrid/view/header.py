# SPDX-License-Identifier: MIT

from typing import Optional

from rich import print
from rich.padding import Padding

from timegrid.time import utc_offset_label
from timegrid.view.state import get_show_header


def header(utc_offset_hours: float, sub_header: Optional[str] = None) -> None:
    """Print the application header with the time zone label.

    Args:
        utc_offset_hours: Configured offset, shown as e.g. GMT+8
        sub_header: Optional sub-header text to display
    """
    if not get_show_header():
        return

    additional = ""
    if sub_header is not None:
        additional = f"[sandy_brown]{sub_header}[/sandy_brown]"
    timezone = f"[plum1]{utc_offset_label(utc_offset_hours)}[/plum1]"

    print(Padding("[dark_orange]timegrid[/dark_orange]", (1, 0, 0, 1)))
    print(Padding(additional, (0, 1)))
    print(Padding(timezone, (0, 1)))
