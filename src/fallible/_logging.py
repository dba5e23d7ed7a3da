"""
Structured logging for fallible.

Loggers are structlog ``BoundLogger`` instances wrapping the stdlib logger of
the same name. ``filter_by_level`` runs first, so nothing is rendered unless
the application enables the ``fallible`` loggers. The library never installs
handlers or touches the root logger.
"""

from __future__ import annotations

import logging
from typing import Any

import structlog

__all__ = ["get_logger"]


def _get_processors() -> list[Any]:
    return [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.format_exc_info,
        structlog.processors.KeyValueRenderer(key_order=["event", "logger", "level"]),
    ]


def get_logger(name: str) -> Any:
    """
    Return a structlog logger bound to the stdlib logger *name*.

    Usage::

        logger = get_logger(__name__)
        logger.debug("tap_callback_failed", branch="ok", exc_info=True)
    """
    return structlog.wrap_logger(
        logging.getLogger(name),
        processors=_get_processors(),
        wrapper_class=structlog.stdlib.BoundLogger,
    )
