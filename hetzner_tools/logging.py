"""
Structured logging for Hetzner Tools.

All output goes to stderr: stdout is reserved for the MCP stdio protocol and
for the text printed by ``hetzner-tools call``. Importing this package routes
structlog's default pipeline to stderr unless the host application has
already configured structlog; ``configure_logging`` sets level and format.

Modules obtain loggers with ``structlog.get_logger(__name__)`` and log
snake_case events with keyword context.
"""

import logging
import sys
from typing import Any

import structlog

__all__ = ["configure_logging", "reset_logging"]


def _stderr_logger(*args: Any) -> structlog.PrintLogger:
    """Print logger writing to whatever sys.stderr is at call time."""
    return structlog.PrintLogger(file=sys.stderr)


def reset_logging() -> None:
    """Restore structlog's default processors, rendered to stderr."""
    structlog.reset_defaults()
    structlog.configure(logger_factory=_stderr_logger)


def configure_logging(level: str = "INFO", json: bool = False) -> None:
    """Configure structlog once at process start.

    Args:
        level: Minimum log level name (DEBUG, INFO, WARNING, ...)
        json: Render JSON lines instead of the console format
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    renderer: structlog.types.Processor
    if json:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        logger_factory=_stderr_logger,
        cache_logger_on_first_use=False,
    )


if not structlog.is_configured():
    structlog.configure(logger_factory=_stderr_logger)
