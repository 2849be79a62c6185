"""Bootstrap wiring for logging configuration."""

from __future__ import annotations

from member_discipline.bootstrap.member_actions import get_discipline_config
from member_discipline.config.discipline_config import DisciplineConfig
from member_discipline.infrastructure.observability import configure_structlog


def configure_logging_for(config: DisciplineConfig | None = None) -> DisciplineConfig:
    """Configure structlog for the deployment environment.

    Args:
        config: Configuration to use; read from the environment if omitted.

    Returns:
        The configuration that was applied.
    """
    config = config or get_discipline_config()
    configure_structlog(environment=config.environment)
    return config


__all__ = ["configure_logging_for"]
