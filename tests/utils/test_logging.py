"""Unit tests for epicurves logging helpers."""

import logging
import sys

from epicurves.utils.logging import configure_logging, get_logger


def _stderr_handlers(logger: logging.Logger) -> list[logging.Handler]:
    return [
        h for h in logger.handlers
        if isinstance(h, logging.StreamHandler) and h.stream is sys.stderr
    ]


def test_get_logger_default_name():
    assert get_logger().name == "epicurves"
    assert get_logger("epicurves.line_plot").name == "epicurves.line_plot"


def test_configure_logging_is_idempotent():
    logger = logging.getLogger("epicurves")
    configure_logging(level="DEBUG", force=True)
    configure_logging(level="DEBUG")
    assert len(_stderr_handlers(logger)) == 1
    assert logger.level == logging.DEBUG


def test_configure_logging_env_level(monkeypatch):
    monkeypatch.setenv("EPICURVES_LOG_LEVEL", "WARNING")
    configure_logging(force=True)
    assert logging.getLogger("epicurves").level == logging.WARNING


def test_unknown_level_name_falls_back_to_info():
    configure_logging(level="chatty", force=True)
    assert logging.getLogger("epicurves").level == logging.INFO


def test_numeric_level_and_format_applied():
    configure_logging(level=logging.ERROR, fmt="%(message)s", force=True)
    (handler,) = _stderr_handlers(logging.getLogger("epicurves"))
    assert handler.level == logging.ERROR
    assert handler.formatter._fmt == "%(message)s"


def test_configure_logging_leaves_root_alone():
    root_handlers = list(logging.getLogger().handlers)
    configure_logging(level="DEBUG", force=True)
    assert logging.getLogger().handlers == root_handlers
