"""
Structured logging configuration using structlog.

Usage:
    from apps.core.logging import get_logger

    logger = get_logger(__name__)
    logger.info("otp_issued", identifier="***4567")

Phone numbers are masked before rendering: any ``phone_number`` field is
reduced to its last four digits, so call sites can log the raw value.

Field naming follows Datadog standard attributes where one exists:
    - trace_id: Request correlation ID
    - usr.id: User identifier
    - duration: Request duration in nanoseconds
"""

import logging
import sys
from typing import Any

import structlog
from structlog.types import EventDict, Processor

MASKED_FIELDS = ("phone_number",)


def mask_phone_number(phone_number: str | None) -> str | None:
    """Reduce a phone number to its last 4 digits (e.g. ``***4567``)."""
    if not phone_number:
        return phone_number
    return f"***{phone_number[-4:]}"


def _mask_phone_numbers(
    logger: logging.Logger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Mask phone number fields so full numbers never reach log storage."""
    for field in MASKED_FIELDS:
        value = event_dict.get(field)
        if isinstance(value, str):
            event_dict[field] = mask_phone_number(value)
    return event_dict


def _add_datadog_trace_fields(
    logger: logging.Logger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Rename correlation_id to trace_id for Datadog APM compatibility."""
    if "correlation_id" in event_dict:
        event_dict["trace_id"] = str(event_dict.pop("correlation_id"))
    return event_dict


def _convert_duration_to_nanoseconds(
    logger: logging.Logger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Convert duration_ms to duration (nanoseconds) for Datadog compatibility."""
    if "duration_ms" in event_dict:
        duration_ms = event_dict.pop("duration_ms")
        event_dict["duration"] = int(duration_ms * 1_000_000)
    return event_dict


def configure_logging(json_format: bool = True, log_level: str = "INFO") -> None:
    """
    Configure structlog for the application.

    Uses stdlib integration so Django and third-party loggers share the
    same formatting.

    Args:
        json_format: If True, output JSON (production). If False, pretty console output.
        log_level: Minimum log level to output.
    """
    log_level_int = getattr(logging, log_level.upper(), logging.INFO)

    pre_chain: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        _mask_phone_numbers,
        _add_datadog_trace_fields,
        _convert_duration_to_nanoseconds,
    ]

    if json_format:
        renderer: Processor = structlog.processors.JSONRenderer()
        pre_chain.append(structlog.processors.format_exc_info)
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=True)

    structlog.configure(
        processors=[
            *pre_chain,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=pre_chain,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level_int)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """
    Get a structured logger instance.

    Usage:
        logger = get_logger(__name__)
        logger.info("event_name", key="value", another_key=123)
    """
    return structlog.get_logger(name)


def bind_contextvars(**kwargs: Any) -> None:
    """Bind key-value pairs to every log line in the current request context."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_contextvars() -> None:
    """Clear bound context at the end of a request."""
    structlog.contextvars.clear_contextvars()
