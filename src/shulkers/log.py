"""Logging setup for the shulkers CLI.

Modules log through ``logging.getLogger(__name__)``; this wires the
``shulkers`` logger to a rich handler on stderr so diagnostics never mix
with the tables printed on stdout.
"""

from __future__ import annotations

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "shulkers"


def configure_logging(level: str = "WARNING", console: Optional[Console] = None) -> logging.Logger:
    """Configure the package logger. Safe to call more than once."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, level.upper(), logging.WARNING))
    logger.handlers.clear()
    logger.propagate = False

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    logger.addHandler(handler)
    return logger
