"""
Logging configuration helpers.
Both services call `configure_logging` once at app construction so every module logger
shares one format and level.
"""

from __future__ import annotations

import logging

_LOGGING_CONFIGURED = False

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def configure_logging(level_name: str = "INFO") -> None:
    """Configure process-wide logging at the given level name."""

    global _LOGGING_CONFIGURED
    if _LOGGING_CONFIGURED:
        return

    level = getattr(logging, level_name.upper(), logging.INFO)

    logging.basicConfig(level=level, format=LOG_FORMAT)
    _LOGGING_CONFIGURED = True
