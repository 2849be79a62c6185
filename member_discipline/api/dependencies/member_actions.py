"""Member action API dependencies.

Dependency injection for the discipline endpoints. Wiring lives in
bootstrap; these functions are the seams tests override through
``app.dependency_overrides``.
"""

from member_discipline.application.services.penalty_action_service import (
    PenaltyActionService,
)
from member_discipline.bootstrap.member_actions import (
    get_discipline_config,
    get_penalty_action_service as _get_penalty_action_service,
)
from member_discipline.config.discipline_config import DisciplineConfig


def get_penalty_action_service() -> PenaltyActionService:
    """Get the penalty action service singleton."""
    return _get_penalty_action_service()


def get_config() -> DisciplineConfig:
    """Get the discipline configuration."""
    return get_discipline_config()
