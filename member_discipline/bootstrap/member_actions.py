"""Bootstrap wiring for member discipline dependencies.

Stores are in-memory stubs; a deployment against the hosted document
store swaps the three getters below for real adapters.
"""

from __future__ import annotations

from member_discipline.application.ports.action_log import ActionLogProtocol
from member_discipline.application.ports.member_notice import MemberNoticeProtocol
from member_discipline.application.ports.member_repository import (
    MemberRepositoryProtocol,
)
from member_discipline.application.services.action_log_writer import ActionLogWriter
from member_discipline.application.services.counter_store import CounterStore
from member_discipline.application.services.penalty_action_service import (
    PenaltyActionService,
)
from member_discipline.config.discipline_config import DisciplineConfig
from member_discipline.infrastructure.stubs.action_log_stub import ActionLogStub
from member_discipline.infrastructure.stubs.member_notice_stub import MemberNoticeStub
from member_discipline.infrastructure.stubs.member_repository_stub import (
    MemberRepositoryStub,
)

_config: DisciplineConfig | None = None
_member_repository: MemberRepositoryProtocol | None = None
_action_log: ActionLogProtocol | None = None
_member_notices: MemberNoticeProtocol | None = None
_penalty_action_service: PenaltyActionService | None = None


def get_discipline_config() -> DisciplineConfig:
    """Get configuration, read once from the environment."""
    global _config
    if _config is None:
        _config = DisciplineConfig.from_environment()
    return _config


def get_member_repository() -> MemberRepositoryProtocol:
    """Get member repository instance."""
    global _member_repository
    if _member_repository is None:
        _member_repository = MemberRepositoryStub()
    return _member_repository


def get_action_log() -> ActionLogProtocol:
    """Get action log instance."""
    global _action_log
    if _action_log is None:
        _action_log = ActionLogStub()
    return _action_log


def get_member_notices() -> MemberNoticeProtocol:
    """Get member notice inbox instance."""
    global _member_notices
    if _member_notices is None:
        _member_notices = MemberNoticeStub()
    return _member_notices


def get_penalty_action_service() -> PenaltyActionService:
    """Get the penalty action service wired to the singletons above.

    Returns:
        PenaltyActionService instance.
    """
    global _penalty_action_service
    if _penalty_action_service is None:
        repository = get_member_repository()
        _penalty_action_service = PenaltyActionService(
            counter_store=CounterStore(repository),
            log_writer=ActionLogWriter(get_action_log()),
            member_notices=get_member_notices(),
            member_repository=repository,
            config=get_discipline_config(),
        )
    return _penalty_action_service


def reset_member_action_dependencies() -> None:
    """Drop every singleton (for testing)."""
    global _config, _member_repository, _action_log, _member_notices
    global _penalty_action_service
    _config = None
    _member_repository = None
    _action_log = None
    _member_notices = None
    _penalty_action_service = None
