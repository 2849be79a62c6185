"""Startup configuration for the member discipline API.

Usage in FastAPI:
    @asynccontextmanager
    async def lifespan(app):
        configure_logging()
        yield
"""

from structlog import get_logger

from member_discipline.bootstrap.logging import configure_logging_for


def configure_logging() -> None:
    """Configure structured logging for the application.

    APP_ENV selects the renderer:
    - production: JSON output for log aggregation
    - anything else: colored console output

    Should be called first in the startup sequence, before any logging occurs.
    """
    config = configure_logging_for()

    log = get_logger().bind(component="startup_logging")
    log.info(
        "structured_logging_configured",
        environment=config.environment,
        max_conflict_retries=config.max_conflict_retries,
    )
