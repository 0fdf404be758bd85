"""
Logging setup for cartship.

All loggers live under the ``cartship`` namespace so a single handler on the
root package logger covers the harness, the CLI and the E2E fixtures.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional

ROOT_LOGGER_NAME = "cartship"
LOG_LEVEL_ENV = "CARTSHIP_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def get_logger(name: str) -> logging.Logger:
    """Return a logger namespaced under ``cartship``.

    Args:
        name: Short module name, e.g. ``"seeding"``

    Returns:
        Logger named ``cartship.<name>``
    """
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def setup_logging(level: Optional[str | int] = None) -> logging.Logger:
    """Attach a stream handler to the ``cartship`` logger.

    Safe to call more than once; the handler is only added the first time.

    Args:
        level: Log level name or number. Falls back to ``CARTSHIP_LOG_LEVEL``,
            then ``WARNING``.

    Returns:
        The configured package logger
    """
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV, "WARNING")
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)

    if not any(getattr(h, "_cartship", False) for h in logger.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._cartship = True  # type: ignore[attr-defined]
        logger.addHandler(handler)

    return logger
