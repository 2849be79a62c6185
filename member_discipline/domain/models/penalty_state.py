"""Penalty state projection used by the escalation policy.

Escalation thresholds live here as module constants. They are fixed
business rules, not configuration.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from member_discipline.domain.models.member import MemberStatus

# Every third notification generates one automatic warning
NOTIFICATIONS_PER_AUTO_WARNING: int = 3

# Three accumulated warnings ban the member automatically
WARNINGS_PER_AUTO_BAN: int = 3


@dataclass(frozen=True, eq=True)
class PenaltyState:
    """The four member fields governed by the escalation policy.

    Attributes:
        status: Access status.
        warning_count: Accumulated warnings.
        notification_count: Cumulative notifications.
        ban_reason: Reason for the current ban, if any.
    """

    status: MemberStatus
    warning_count: int = 0
    notification_count: int = 0
    ban_reason: str | None = None

    def evolve(self, **changes: object) -> PenaltyState:
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)  # type: ignore[arg-type]

    @property
    def notifications_toward_next_warning(self) -> int:
        """Progress toward the next automatic warning (0, 1 or 2)."""
        return self.notification_count % NOTIFICATIONS_PER_AUTO_WARNING
