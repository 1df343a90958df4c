"""Logger wiring for the tagging engine."""
from __future__ import annotations

import logging
import sys
from typing import Optional

from version import __version__, DEV_MODE_ENV_VAR, is_dev_build

LOGGER_NAME = "ScriptBreakdown"
LOG_TAG = LOGGER_NAME


def effective_log_level(level: Optional[int] = None) -> int:
    """Dev builds always log at DEBUG; otherwise honour ``level`` (default INFO)."""

    if level is None:
        level = logging.INFO
    if is_dev_build() and level > logging.DEBUG:
        return logging.DEBUG
    return level


def configure_logger(level: Optional[int] = None, stream=None) -> logging.Logger:
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(effective_log_level(level))
    if not any(getattr(handler, "_breakdown_handler", False) for handler in logger.handlers):
        handler = logging.StreamHandler(stream or sys.stderr)
        handler._breakdown_handler = True  # type: ignore[attr-defined]
        formatter = logging.Formatter(f"[%(asctime)s] [{LOG_TAG}] %(message)s", "%H:%M:%S")
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        if is_dev_build():
            logger.info(
                "Running tagging engine dev build (%s); override via %s=0 to force release behaviour.",
                __version__,
                DEV_MODE_ENV_VAR,
            )
    logger.propagate = False
    return logger
