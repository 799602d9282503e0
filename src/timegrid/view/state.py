"""Display switches shared by the terminal views for one invocation."""

# SPDX-License-Identifier: MIT

from contextvars import ContextVar

_show_header_var: ContextVar[bool] = ContextVar("show_header", default=True)

# Collapsed bands show at most the configured number of all-day rows
_expand_all_day_var: ContextVar[bool] = ContextVar("expand_all_day", default=False)


def set_show_header(value: bool) -> None:
    _show_header_var.set(value)


def get_show_header() -> bool:
    return _show_header_var.get()


def set_expand_all_day(value: bool) -> None:
    """Set whether the all-day band lists every row instead of "+N more".

    Args:
        value: True to paint every row, False to collapse to the row cap
    """
    _expand_all_day_var.set(value)


def get_expand_all_day() -> bool:
    return _expand_all_day_var.get()
