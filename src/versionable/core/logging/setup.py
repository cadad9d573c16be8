"""Structured logging setup.

The package logs through ``structlog.get_logger()`` everywhere. Host
applications usually configure structlog themselves; ``configure_logging``
is for applications and scripts that do not.
"""

import logging

import structlog

from versionable.config import VersionableSettings, settings


def configure_logging(config: VersionableSettings | None = None) -> None:
    """Configure structlog processors and the log level.

    Args:
        config: Settings to read the log level and renderer from
    """
    config = config or settings
    level = logging.getLevelName(config.log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            (
                structlog.processors.JSONRenderer()
                if config.json_logs
                else structlog.dev.ConsoleRenderer()
            ),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
