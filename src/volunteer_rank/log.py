"""Logging setup for the volunteer-rank command line."""
from __future__ import annotations

import logging

from rich.logging import RichHandler


def configure_logging(level: str | int = "WARNING") -> None:
    """Install a RichHandler on the root logger, replacing existing handlers."""
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.WARNING)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    if root_logger.hasHandlers():
        root_logger.handlers.clear()

    handler = RichHandler(level=level, show_path=False, rich_tracebacks=True)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    root_logger.addHandler(handler)
