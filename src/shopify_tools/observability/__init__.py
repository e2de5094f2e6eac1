"""Observability helpers (logging)."""

from .logging import configure_level, get_logger

__all__ = ["configure_level", "get_logger"]
