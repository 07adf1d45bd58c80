"""
Logging setup for locked_bitmap.

Library modules only call ``structlog.get_logger(__name__)`` and emit
debug events such as ``buffer_locked`` or ``search_completed``. Nothing is
printed until an application (the CLI, or a caller's own script) runs
setup_logging(). Log lines go to stderr so command output on stdout stays
clean.

Example:
    >>> from locked_bitmap.utils import setup_logging, get_logger
    >>>
    >>> setup_logging(level="DEBUG", format="json")
    >>> get_logger(__name__).info("search_started", haystack=(640, 480))
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

RENDERERS = ("console", "json")


def _context_processors(include_timestamp: bool, include_location: bool) -> list[Any]:
    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
    ]
    if include_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso"))
    if include_location:
        processors.append(
            structlog.processors.CallsiteParameterAdder(
                [
                    structlog.processors.CallsiteParameter.MODULE,
                    structlog.processors.CallsiteParameter.LINENO,
                ]
            )
        )
    return processors


def _renderer(format: str) -> Any:
    if format == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(
        colors=sys.stderr.isatty(),
        exception_formatter=structlog.dev.plain_traceback,
    )


def setup_logging(
    level: str = "INFO",
    format: str = "console",
    *,
    include_timestamp: bool = True,
    include_location: bool = False,
) -> None:
    """Route structlog events through stdlib logging on stderr.

    Args:
        level: Minimum level name (DEBUG shows every library event)
        format: "console" for humans, "json" for one object per line
        include_timestamp: Add an ISO timestamp
        include_location: Add the emitting module and line number

    Raises:
        ValueError: If the format is not a known renderer
    """
    if format not in RENDERERS:
        raise ValueError(f"Unknown log format {format!r}; expected one of {RENDERERS}")

    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=level.upper())

    structlog.configure(
        processors=[
            *_context_processors(include_timestamp, include_location),
            structlog.processors.StackInfoRenderer(),
            _renderer(format),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Structured logger for ``name`` (usually ``__name__``)."""
    logger: structlog.stdlib.BoundLogger = structlog.get_logger(name)
    return logger


def bind_context(**kwargs: Any) -> None:
    """Attach key-value pairs to every following log line.

    Example:
        >>> bind_context(command="find")
        >>> logger.info("search_finished")  # includes command="find"
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    """Drop everything bound with bind_context()."""
    structlog.contextvars.clear_contextvars()
