"""
Structured logging for transmute.

Transformers are pure and log sparingly: only at DEBUG, only where a log line
explains a result that would otherwise look surprising (a mapping whose
reverse lookups are ambiguous, the element that stopped a sequence
transformation). Applications decide whether those lines are shown by
calling ``configure_logging`` once at startup.

Architecture:
    ::

        configure_logging(level="DEBUG", json_format=True, service="billing")
              ↓
        structlog processor chain:
          1. TimeStamper (optional)
          2. merge_contextvars
          3. add_log_level / add_logger_name
          4. StackInfoRenderer / set_exc_info
          5. add_service_metadata
          6. elasticsearch_compatible (JSON only)
          7. JSONRenderer (or ConsoleRenderer for dev)

Examples:
    >>> from transmute.core.logging import configure_logging, get_logger
    >>> configure_logging(level="DEBUG", json_format=True, service="billing")
    >>> logger = get_logger(__name__)
    >>> logger.debug("mapping_lifted", entries=3)

    Scoped context:

    >>> with LogContext(record_id="r-17"):
    ...     result = transformer.transformed_value(raw)

Guardrails:
    - Auto-detects JSON vs console based on TTY when json_format is None
    - Service name stored globally (set once at startup)
    - ECS-compatible field names for JSON output

Tags:
    logging, structlog, observability, transmute
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, Any

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

from transmute.core.errors import InvalidConfigError

if TYPE_CHECKING:
    from transmute.core.settings import TransmuteSettings


# Store service name for metadata
_SERVICE_NAME = "transmute"

# Library logger stays quiet unless the application adds handlers
logging.getLogger("transmute").addHandler(logging.NullHandler())


def _add_service_metadata(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Add service-level metadata to all logs."""
    event_dict.setdefault("service.name", _SERVICE_NAME)
    return event_dict


def _elasticsearch_compatible(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Make field names Elasticsearch/ECS compatible."""
    if "timestamp" in event_dict:
        event_dict["@timestamp"] = event_dict.pop("timestamp")

    if "level" in event_dict:
        event_dict["log.level"] = event_dict.pop("level")

    return event_dict


def configure_logging(
    level: str = "INFO",
    json_format: bool | None = None,
    service: str = "transmute",
    add_timestamp: bool = True,
) -> None:
    """Configure structured logging for the application.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_format: True for JSON, False for console, None for auto (JSON if not tty)
        service: Service name to include in logs
        add_timestamp: Include ISO timestamp in logs
    """
    level_num = logging.getLevelName(level.upper())
    if not isinstance(level_num, int):
        raise InvalidConfigError("log_level", level)

    global _SERVICE_NAME
    _SERVICE_NAME = service

    if json_format is None:
        json_format = not sys.stdout.isatty()

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        _add_service_metadata,
    ]

    if add_timestamp:
        shared_processors.insert(0, structlog.processors.TimeStamper(fmt="iso"))

    if json_format:
        shared_processors.append(_elasticsearch_compatible)
        renderer: Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=True)

    structlog.configure(
        processors=shared_processors + [renderer],
        wrapper_class=structlog.make_filtering_bound_logger(level_num),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level_num,
    )
    logging.getLogger("transmute").setLevel(level_num)


def configure_from_settings(settings: TransmuteSettings | None = None) -> None:
    """Apply a TransmuteSettings (the cached one by default) to logging."""
    if settings is None:
        from transmute.core.settings import get_settings

        settings = get_settings()
    configure_logging(
        level=settings.log_level,
        json_format=settings.log_json,
        service=settings.service,
    )


def get_logger(name: str | None = None) -> Any:
    """Get a structured logger.

    The logger always writes through the stdlib logger of the same name, so
    until an application calls ``configure_logging`` its output is subject to
    stdlib levels and handlers (silent for DEBUG), never structlog's default
    print-to-stdout factory.

    Args:
        name: Logger name (usually __name__)
    """
    return structlog.wrap_logger(logging.getLogger(name))


def bind_context(**kwargs: Any) -> None:
    """Bind context to include in all subsequent logs."""
    structlog.contextvars.bind_contextvars(**kwargs)


def unbind_context(*keys: str) -> None:
    """Remove specific keys from logging context."""
    structlog.contextvars.unbind_contextvars(*keys)


def clear_context() -> None:
    """Clear all bound context."""
    structlog.contextvars.clear_contextvars()


class LogContext:
    """Context manager for scoped logging context.

    Example:
        with LogContext(record_id="r-17", source="ledger"):
            result = lift_sequence(amount).transformed_value(rows)
        # Context cleared here
    """

    def __init__(self, **kwargs: Any):
        self._context = kwargs

    def __enter__(self) -> LogContext:
        bind_context(**self._context)
        return self

    def __exit__(self, *args: Any) -> None:
        unbind_context(*self._context.keys())


__all__ = [
    "configure_logging",
    "configure_from_settings",
    "get_logger",
    "bind_context",
    "unbind_context",
    "clear_context",
    "LogContext",
]
