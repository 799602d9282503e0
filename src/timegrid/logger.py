# SPDX-License-Identifier: MIT

import logging

from rich.console import Console
from rich.logging import RichHandler

LOG_FORMAT = "%(message)s"


def configure_logging(verbose: bool = False) -> None:
    """Route the package loggers to stderr through rich."""
    level = logging.DEBUG if verbose else logging.WARNING
    handler = RichHandler(
        console=Console(stderr=True), show_path=verbose, rich_tracebacks=True
    )
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="[%X]"))

    root = logging.getLogger("timegrid")
    for existing in list(root.handlers):
        if isinstance(existing, RichHandler):
            root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(level)
