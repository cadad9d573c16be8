"""Logging module with structured logging."""

from versionable.core.logging.setup import configure_logging


__all__ = [
    "configure_logging",
]
