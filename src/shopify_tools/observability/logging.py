"""Shared logging utilities for the Shopify tool server.

Usage example:
    from shopify_tools.observability.logging import get_logger

    logger = get_logger("shopify_tools.infrastructure.http")
    logger.debug("POST %s", url)

All handlers write to stderr: stdout carries the MCP stdio protocol stream.
"""

from __future__ import annotations

import logging
import sys
import time

_ROOT_LOGGER_NAME = "shopify_tools"
_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_LOG_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"


def get_logger(name: str) -> logging.Logger:
    """Return a stderr logger configured for UTC timestamps.

    Args:
        name: Logger name (use a stable module-qualified name).

    Returns:
        A logger with a single stderr handler and a consistent UTC format.
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        formatter = logging.Formatter(fmt=_LOG_FORMAT, datefmt=_LOG_DATE_FORMAT)
        formatter.converter = time.gmtime
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)
        logger.propagate = False
    return logger


def configure_level(level: str) -> None:
    """Apply a level name (e.g. "DEBUG") to every shopify_tools logger."""
    resolved = logging.getLevelName(level.strip().upper())
    if not isinstance(resolved, int):
        resolved = logging.INFO
    manager = logging.Logger.manager
    for name in list(manager.loggerDict):
        if name == _ROOT_LOGGER_NAME or name.startswith(f"{_ROOT_LOGGER_NAME}."):
            logging.getLogger(name).setLevel(resolved)
