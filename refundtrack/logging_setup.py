"""Logging configuration for command-line entry points.

Library modules only call ``logging.getLogger(__name__)``; handlers are
attached here, once, by the CLI.
"""

from __future__ import annotations

import logging
import sys
from typing import IO

_PKG_LOGGER_NAME = "refundtrack"
_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"


def _parse_level(level: int | str) -> int:
    if isinstance(level, int):
        return level
    level = level.strip().upper()
    if level.isdigit():
        return int(level)
    numeric = getattr(logging, level, None)
    if isinstance(numeric, int):
        return numeric
    raise ValueError(f"Unknown log level: {level!r}")


def configure_logging(level: int | str = "WARNING", *, stream: IO[str] | None = None) -> None:
    """Attach a single stream handler to the package logger."""
    numeric = _parse_level(level)
    logger = logging.getLogger(_PKG_LOGGER_NAME)
    for h in list(logger.handlers):
        logger.removeHandler(h)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(numeric)
    logger.propagate = False
