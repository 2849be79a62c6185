"""Discipline action models.

This module defines the action vocabulary of the penalty engine, the
immutable action log entry written for every mutation, and the result
handed back to the admin console.

Operating Rules:
- Every state-changing operation produces at least one ActionLogEntry
- Automatic escalations produce one extra entry each, is_automatic=True
- Log entries are created once and never mutated or deleted
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from uuid import UUID

from member_discipline.domain.models.member import MemberStatus

# Actor id recorded on automatic entries
SYSTEM_PRINCIPAL_ID: str = "system"


class ActionType(str, Enum):
    """Operations a principal can request.

    DELETE is checked by the permission gate only; it never produces an
    action log entry (deletion archives the record instead).
    """

    NOTIFICATION = "notification"
    WARNING = "warning"
    BAN = "ban"
    REACTIVATE = "reactivate"
    CLEAR_WARNINGS = "clearWarnings"
    CLEAR_NOTIFICATIONS = "clearNotifications"
    CLEAR_ALL = "clearAll"
    DELETE = "delete"

    @property
    def is_penalty(self) -> bool:
        """Notification, warning and ban target someone else and penalise them."""
        return self in PENALTY_ACTIONS

    @property
    def forbids_self_target(self) -> bool:
        return self in PENALTY_ACTIONS or self == ActionType.REACTIVATE

    @property
    def is_counter_reset(self) -> bool:
        return self in COUNTER_RESET_ACTIONS


PENALTY_ACTIONS: frozenset[ActionType] = frozenset(
    {ActionType.NOTIFICATION, ActionType.WARNING, ActionType.BAN}
)

COUNTER_RESET_ACTIONS: frozenset[ActionType] = frozenset(
    {ActionType.CLEAR_WARNINGS, ActionType.CLEAR_NOTIFICATIONS, ActionType.CLEAR_ALL}
)

# Text recorded when a counter reset is requested without a justification
DEFAULT_RESET_JUSTIFICATIONS: dict[ActionType, str] = {
    ActionType.CLEAR_WARNINGS: "Limpeza manual de advertências",
    ActionType.CLEAR_NOTIFICATIONS: "Limpeza manual de notificações",
    ActionType.CLEAR_ALL: "Limpeza completa de contadores (advertências e notificações)",
}


class DerivedEventType(str, Enum):
    """Events the escalation policy generates on its own."""

    AUTO_WARNING = "autoWarning"
    AUTO_BAN = "autoBan"

    @property
    def logged_as(self) -> ActionType:
        """The action type recorded in the action log for this event."""
        if self is DerivedEventType.AUTO_WARNING:
            return ActionType.WARNING
        return ActionType.BAN


AUTO_WARNING_REASON: str = "Advertência automática gerada por acúmulo de 3 notificações"
AUTO_BAN_REASON: str = "Banimento automático por acúmulo de 3 advertências"


@dataclass(frozen=True, eq=True)
class DerivedEvent:
    """An automatic event produced by a policy threshold.

    Attributes:
        event_type: AUTO_WARNING or AUTO_BAN.
        reason: Synthetic justification recorded in the log.
    """

    event_type: DerivedEventType
    reason: str


@dataclass(frozen=True, eq=True)
class ActionLogEntry:
    """Immutable audit record of one discrete action.

    Attributes:
        entry_id: Unique identifier of the entry.
        target_member_id: Member the action applied to.
        action_type: What was done.
        justification: Free text reason (synthetic for automatic entries).
        is_automatic: True for policy-generated entries.
        acting_principal_id: Who did it ("system" for automatic entries).
        timestamp: When it was recorded (UTC).
        triggered_by: For automatic entries, the principal whose request
            caused the escalation. None for manual entries.
    """

    entry_id: UUID
    target_member_id: str
    action_type: ActionType
    justification: str
    is_automatic: bool
    acting_principal_id: str
    timestamp: datetime
    triggered_by: str | None = None


@dataclass(frozen=True, eq=True)
class TriggeredAutomaticAction:
    """An automatic action reported back to the caller for display.

    Attributes:
        action_type: WARNING or BAN.
        reason: The synthetic reason, suitable for a toast notice.
    """

    action_type: ActionType
    reason: str


@dataclass(frozen=True)
class ActionResult:
    """Outcome of a successful discipline operation.

    Attributes:
        member_id: Target member.
        action_type: The requested action.
        final_status: Status after the action and its cascades.
        warning_count: Warning counter after the action.
        notification_count: Notification counter after the action.
        triggered_automatic_actions: Automatic warnings/bans, in order.
        log_entries: Every action log entry written, primary first.
        version: Store version after the write.
        attempts: How many read/compute/write cycles were needed.
    """

    member_id: str
    action_type: ActionType
    final_status: MemberStatus
    warning_count: int
    notification_count: int
    triggered_automatic_actions: tuple[TriggeredAutomaticAction, ...] = ()
    log_entries: tuple[ActionLogEntry, ...] = ()
    version: int = 0
    attempts: int = 1

    @property
    def auto_ban_triggered(self) -> bool:
        return any(
            a.action_type == ActionType.BAN for a in self.triggered_automatic_actions
        )
