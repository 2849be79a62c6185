"""Structured logging configuration with structlog.

Production emits one JSON object per line for log aggregation; every
other environment gets the colored console renderer.

Log Entry Format (production):
    {
        "timestamp": "2024-01-01T00:00:00.000000Z",
        "level": "info",
        "event": "member_action_completed",
        "correlation_id": "uuid",
        "service": "PenaltyActionService",
        ...additional context
    }

Usage:
    from member_discipline.infrastructure.observability import configure_structlog

    configure_structlog(environment="production")

    import structlog
    log = structlog.get_logger()
    log.info("event_name", key="value")
"""

import logging
import os
from typing import cast

import structlog
from structlog.typing import Processor

from member_discipline.infrastructure.observability.correlation import (
    correlation_id_processor,
)

LOG_LEVEL_ENV = "LOG_LEVEL"
DEFAULT_LOG_LEVEL = "INFO"


def _get_log_level() -> int:
    """Get the configured log level from the environment (default INFO)."""
    level_name = os.getenv(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL).upper()
    return getattr(logging, level_name, logging.INFO)


def configure_structlog(environment: str = "production") -> None:
    """Configure structlog for the application.

    Should be called once at application startup.

    Args:
        environment: 'production' for JSON output, anything else for
            console output.
    """
    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        cast(Processor, correlation_id_processor),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if environment == "production":
        final_processor: Processor = structlog.processors.JSONRenderer()
    else:
        final_processor = structlog.dev.ConsoleRenderer(colors=True)

    structlog.configure(
        processors=shared_processors + [final_processor],
        wrapper_class=structlog.make_filtering_bound_logger(_get_log_level()),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger_for_service(
    service_name: str, component: str = "discipline"
) -> structlog.BoundLogger:
    """Get a logger with service name and component already bound.

    Args:
        service_name: The name of the service (typically class name).
        component: The component type (default: "discipline").

    Returns:
        A BoundLogger with service and component bound.
    """
    return structlog.get_logger().bind(
        service=service_name,
        component=component,
    )
