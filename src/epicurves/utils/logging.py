"""Logger helpers for epicurves.

Modules inside the package only ever do ``logger = get_logger(__name__)``.
Attaching a console handler is left to whoever runs the code: the scripts in
``examples/`` call configure_logging(), while a host application that has its
own logging setup simply receives the propagated "epicurves.*" records.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional, Union

DEFAULT_FMT = "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d:%(funcName)s: %(message)s"
DEFAULT_DATEFMT = "%Y-%m-%d %H:%M:%S"

ROOT_LOGGER_NAME = "epicurves"
LEVEL_ENV_VAR = "EPICURVES_LOG_LEVEL"


def _resolve_level(level: Optional[Union[str, int]]) -> int:
    """Numeric level from an int, a level name, or $EPICURVES_LOG_LEVEL.

    Unrecognized names fall back to INFO.
    """
    if level is None:
        level = os.environ.get(LEVEL_ENV_VAR, "INFO")
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def _stderr_handler(logger: logging.Logger) -> Optional[logging.Handler]:
    for handler in logger.handlers:
        if isinstance(handler, logging.StreamHandler) and handler.stream is sys.stderr:
            return handler
    return None


def configure_logging(
    level: Optional[Union[str, int]] = None,
    *,
    fmt: Optional[str] = None,
    datefmt: Optional[str] = None,
    force: bool = False,
) -> None:
    """Send "epicurves" records to stderr. The root logger is left alone.

    Args:
        level: Level name or number; $EPICURVES_LOG_LEVEL, then INFO, when omitted.
        fmt: Record format, DEFAULT_FMT when omitted.
        datefmt: Timestamp format, DEFAULT_DATEFMT when omitted.
        force: Drop every handler already on the "epicurves" logger first.
            Without it, a second call only updates the level.
    """
    resolved = _resolve_level(level)
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(resolved)

    if force:
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()
    elif _stderr_handler(logger) is not None:
        return

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(resolved)
    handler.setFormatter(logging.Formatter(fmt=fmt or DEFAULT_FMT, datefmt=datefmt or DEFAULT_DATEFMT))
    logger.addHandler(handler)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Logger for `name`, or the package logger "epicurves" when None."""
    return logging.getLogger(name or ROOT_LOGGER_NAME)
