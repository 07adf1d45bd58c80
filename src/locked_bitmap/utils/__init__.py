"""
Utility functions for locked_bitmap.

Logging:
- setup_logging(): Configure structured logging with structlog
- get_logger(name): Get a logger instance
- bind_context() / clear_context(): Manage contextvars bound to every log line

Example:
    >>> from locked_bitmap.utils import get_logger
    >>>
    >>> logger = get_logger(__name__)
    >>> logger.info("image_loaded", path="screen.png")
"""

from locked_bitmap.utils.logging import bind_context, clear_context, get_logger, setup_logging

__all__ = [
    "bind_context",
    "clear_context",
    "get_logger",
    "setup_logging",
]
