"""Structured logging configuration using structlog."""

import logging
import sys
from datetime import datetime, timezone

import structlog
from structlog.types import EventDict, Processor


def add_short_timestamp(
    logger: logging.Logger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Add shortened timestamp (HH:MM:SS.ss) to log entries.

    Args:
        logger: Logger instance
        method_name: Method name
        event_dict: Event dictionary

    Returns:
        Updated event dictionary with short timestamp
    """
    now = datetime.now(timezone.utc)
    # HH:MM:SS plus hundredths of a second
    event_dict["timestamp"] = now.strftime("%H:%M:%S") + f".{now.microsecond // 10000:02d}"
    return event_dict


def configure_logging(log_level: str = "INFO", json_logs: bool = False) -> None:
    """Configure structured logging for an application using the SDK.

    The SDK itself never calls this on import; it only emits events through
    ``get_logger``. Applications opt in once at startup, or through
    ``construct_sdk_from_settings``.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_logs: Whether to output logs in JSON format (default: False for console output)
    """
    # Unknown level names fall back to INFO
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=numeric_level,
    )

    # Processor chain shared by both renderers
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        add_short_timestamp,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    # Renderer goes last
    if json_logs:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger for an SDK module.

    Args:
        name: Logger name (typically __name__, under ``paraswap_sdk``)

    Returns:
        structlog logger; output follows whatever the application configured
    """
    return structlog.get_logger(name)
