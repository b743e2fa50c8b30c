"""Logging configuration for the ``xpense`` package.

Entry points (the CLI, the FastAPI lifespan) call ``configure_logging`` once.
Library modules only do ``logging.getLogger(__name__)`` and never attach
handlers of their own.
"""
from __future__ import annotations

import logging
import sys
from typing import IO

from xpense.config import LOG_LEVEL

_PKG_LOGGER_NAME = "xpense"
_DEFAULT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_CONFIGURED = False


def _parse_level(level: int | str | None) -> int:
    if isinstance(level, int):
        return level
    if level is None:
        level = LOG_LEVEL
    level = str(level).strip().upper()
    if level.isdigit():
        return int(level)
    numeric = getattr(logging, level, None)
    return numeric if isinstance(numeric, int) else logging.INFO


def configure_logging(
    level: int | str | None = None,
    *,
    fmt: str | None = None,
    stream: IO[str] = sys.stderr,
) -> None:
    """Attach a single stream handler to the package root logger."""
    global _CONFIGURED
    logger = logging.getLogger(_PKG_LOGGER_NAME)
    logger.setLevel(_parse_level(level))
    if _CONFIGURED:
        return

    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter(fmt or _DEFAULT_FORMAT))
    logger.addHandler(handler)
    logger.propagate = False
    _CONFIGURED = True


logging.getLogger(_PKG_LOGGER_NAME).addHandler(logging.NullHandler())
