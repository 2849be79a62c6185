"""Domain models for member discipline."""

from member_discipline.domain.models.action import (
    ActionLogEntry,
    ActionResult,
    ActionType,
    DerivedEvent,
    DerivedEventType,
    TriggeredAutomaticAction,
)
from member_discipline.domain.models.member import (
    ArchivedMember,
    Member,
    MemberSnapshot,
    MemberStatus,
)
from member_discipline.domain.models.member_notice import MemberNotice
from member_discipline.domain.models.member_patch import MemberPatch
from member_discipline.domain.models.penalty_state import PenaltyState
from member_discipline.domain.models.principal import Principal

__all__: list[str] = [
    "ActionLogEntry",
    "ActionResult",
    "ActionType",
    "ArchivedMember",
    "DerivedEvent",
    "DerivedEventType",
    "Member",
    "MemberNotice",
    "MemberPatch",
    "MemberSnapshot",
    "MemberStatus",
    "PenaltyState",
    "Principal",
    "TriggeredAutomaticAction",
]
