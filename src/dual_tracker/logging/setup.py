"""Structured logging setup with structlog.

Every entry point (API runner, report CLI) calls :func:`configure_logging`
once with its :class:`LoggingConfig` and a ``component`` name; library code
only ever does ``structlog.get_logger("<name>")`` at module level.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

import structlog

from dual_tracker.config.schema import LoggingConfig


def setup_logging(
    level: str = "INFO",
    log_format: str = "json",
    *,
    stream: TextIO | None = None,
    **context,
) -> None:
    """Configure structlog and the root stdlib logger.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_format: "json" for machine consumption, "console" for a terminal.
        stream: Where rendered events go; stderr when None, since the report
            CLI owns stdout.
        context: Key/value pairs attached to every event of the process,
            e.g. ``component="api"``. Replaces any previously bound context.
    """
    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if log_format == "console":
        renderer: structlog.types.Processor = structlog.dev.ConsoleRenderer()
    else:
        renderer = structlog.processors.JSONRenderer()

    # Module-level loggers are created at import, before setup runs, so
    # they must not cache the pre-setup configuration.
    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared_processors,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    structlog.contextvars.clear_contextvars()
    if context:
        structlog.contextvars.bind_contextvars(**context)


def configure_logging(config: LoggingConfig, component: str) -> None:
    """Apply a LoggingConfig and tag every event with *component*."""
    setup_logging(level=config.level, log_format=config.format, component=component)


def get_logger(name: str | None = None, **initial_context) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger, optionally pre-bound with context."""
    logger = structlog.get_logger(name)
    if initial_context:
        logger = logger.bind(**initial_context)
    return logger
