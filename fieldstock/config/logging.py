"""
Structured logging for inventory operations.

Every event carries the service identity. Events emitted while a use case is
running also carry the operation name bound by ``operation_scope``, so item
failures from one batch can be filtered together.
"""

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import structlog
from structlog.types import EventDict, Processor

from fieldstock.config.settings import get_settings

# Library loggers that would otherwise log every edge function request
_NOISY_LOGGERS = ("httpx", "httpcore", "uvicorn.access", "aiosqlite")


def add_app_context(logger: logging.Logger, method_name: str, event_dict: EventDict) -> EventDict:
    settings = get_settings()
    event_dict["app"] = settings.app_name
    event_dict["version"] = settings.app_version
    event_dict["environment"] = settings.environment
    return event_dict


def expand_named_tuples(logger: logging.Logger, method_name: str, event_dict: EventDict) -> EventDict:
    """
    Render named tuples (equivalence keys) as field mappings.

    ``EquivalenceKey(10, None, None, 7, 1)`` becomes
    ``{"location_id": 10, "assigned_crew_id": None, ...}`` so a NULL crew
    is distinguishable from a missing field in JSON output.
    """
    for name, value in event_dict.items():
        if isinstance(value, tuple) and hasattr(value, "_asdict"):
            event_dict[name] = value._asdict()
    return event_dict


def configure_logging(level: str | None = None) -> None:
    """Configure structlog and the stdlib root logger."""
    settings = get_settings()
    log_level = (level or settings.log_level).upper()

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        add_app_context,
        expand_named_tuples,
    ]

    if settings.environment == "development":
        renderer: list[Processor] = [structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())]
    else:
        renderer = [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]

    structlog.configure(
        processors=shared_processors + renderer,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=getattr(logging, log_level))
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


@contextmanager
def operation_scope(operation: str, **fields: Any) -> Iterator[None]:
    """Bind ``operation`` (and any extra fields) to every event logged inside."""
    with structlog.contextvars.bound_contextvars(operation=operation, **fields):
        yield


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)
