"""Member domain model.

This module defines the member record tracked by the penalty engine and
the snapshot types the persistence collaborator hands back.

Operating Rules:
- Members are created ACTIVE with both counters at zero
- Counters are never negative
- Members are mutated only through MemberPatch (see member_patch.py)
- Members are never hard-deleted without an ArchivedMember first
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum

from member_discipline.domain.models.penalty_state import PenaltyState


class MemberStatus(Enum):
    """Access status of a member.

    State Machine:
        ACTIVE -> BANNED (manual ban or automatic ban at 3 warnings)
        BANNED -> ACTIVE (explicit reactivation, resets counters)
        ACTIVE -> INACTIVE (administrative, outside the penalty engine)

    BANNED never expires on its own.

    Values keep the labels stored by the hosted document store.
    """

    ACTIVE = "Ativo"
    INACTIVE = "Inativo"
    BANNED = "Banido"


def _utc_now() -> datetime:
    """Return current UTC time with timezone info."""
    return datetime.now(timezone.utc)


@dataclass(frozen=True, eq=True)
class Member:
    """A person tracked by the penalty engine.

    Attributes:
        id: Opaque identifier (auth provider uid), immutable.
        name: Display name.
        status: Current access status.
        warning_count: Warnings accumulated since last reset/reactivation.
        notification_count: Cumulative notifications since last
            reactivation or explicit clear. Evaluated modulo 3.
        ban_reason: Why the member was banned, None unless BANNED.
        email: Contact email, if known.
        role: Role label (e.g. "Presidente", "Diretor", "Analista").
        sector: Sector label (e.g. "Marketing").
        is_admin: Administrator flag.
        is_power_user: Power-user flag (Presidente, Diretor, Head).
        banned_at: When the current ban was applied.
        last_reactivated_at: When the member was last reactivated.
        created_at: Registration time.
    """

    id: str
    name: str
    status: MemberStatus = MemberStatus.ACTIVE
    warning_count: int = 0
    notification_count: int = 0
    ban_reason: str | None = None
    email: str | None = None
    role: str | None = None
    sector: str | None = None
    is_admin: bool = False
    is_power_user: bool = False
    banned_at: datetime | None = None
    last_reactivated_at: datetime | None = None
    created_at: datetime | None = None

    def __post_init__(self) -> None:
        """Validate counters.

        Raises:
            ValueError: If id is empty or a counter is negative.
        """
        if not self.id:
            raise ValueError("Member id must not be empty")
        if self.warning_count < 0:
            raise ValueError(f"warning_count must be >= 0, got {self.warning_count}")
        if self.notification_count < 0:
            raise ValueError(
                f"notification_count must be >= 0, got {self.notification_count}"
            )

    @classmethod
    def register(
        cls,
        member_id: str,
        name: str,
        email: str | None = None,
        role: str | None = None,
        sector: str | None = None,
        is_admin: bool = False,
        is_power_user: bool = False,
        created_at: datetime | None = None,
    ) -> Member:
        """Create a freshly registered member (ACTIVE, counters at zero)."""
        return cls(
            id=member_id,
            name=name,
            email=email,
            role=role,
            sector=sector,
            is_admin=is_admin,
            is_power_user=is_power_user,
            created_at=created_at or _utc_now(),
        )

    @property
    def penalty_state(self) -> PenaltyState:
        """Project the fields the escalation policy works on."""
        return PenaltyState(
            status=self.status,
            warning_count=self.warning_count,
            notification_count=self.notification_count,
            ban_reason=self.ban_reason,
        )

    @property
    def is_banned(self) -> bool:
        return self.status == MemberStatus.BANNED


@dataclass(frozen=True, eq=True)
class MemberSnapshot:
    """A member as read from the store, with its optimistic version token.

    Attributes:
        member: The member record.
        version: Store version at read time. Writes must present it back.
    """

    member: Member
    version: int


@dataclass(frozen=True, eq=True)
class ArchivedMember:
    """Copy of a member record kept when the member is deleted.

    Attributes:
        member: The member exactly as it was before deletion.
        deleted_at: When the deletion happened.
        deleted_by: Member id of the administrator who deleted it.
    """

    member: Member
    deleted_at: datetime
    deleted_by: str
