"""Structured logging configuration for loago.

Uses structlog for both human-readable console output and
machine-readable JSON. Logs go to stderr; stdout is reserved for
the report.
"""

import logging
import sys
from typing import TYPE_CHECKING

import structlog
from structlog.typing import FilteringBoundLogger, Processor

if TYPE_CHECKING:
    from loago.config import LoagoSettings


def configure_logging(settings: "LoagoSettings | None" = None) -> None:
    """Configure structured logging based on settings.

    Args:
        settings: Application settings. If None, uses defaults.
    """
    log_level = logging.WARNING
    log_format = "console"

    if settings is not None:
        log_level = getattr(logging, settings.log_level.upper(), logging.WARNING)
        log_format = settings.log_format

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if log_format == "json":
        processors: list[Processor] = [
            *shared_processors,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = [
            *shared_processors,
            structlog.dev.ConsoleRenderer(
                colors=sys.stderr.isatty(),
                exception_formatter=structlog.dev.plain_traceback,
            ),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str | None = None) -> FilteringBoundLogger:
    """Logger that tags its events with ``logger=name`` when a name is given."""
    if name:
        return structlog.get_logger(logger=name)
    return structlog.get_logger()


def bind_context(**kwargs: object) -> None:
    """Add fields to every event logged until :func:`clear_context`.

    The CLI binds ``command`` for the duration of one command.
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()


class Loggers:
    """Named loggers for the layers of the package."""

    CLI = "loago.cli"
    STORE = "loago.tasks"
    PERSISTENCE = "loago.persistence"

    @classmethod
    def cli(cls) -> FilteringBoundLogger:
        return get_logger(cls.CLI)

    @classmethod
    def store(cls) -> FilteringBoundLogger:
        return get_logger(cls.STORE)

    @classmethod
    def persistence(cls) -> FilteringBoundLogger:
        return get_logger(cls.PERSISTENCE)
