"""Member patch sum type.

A patch is an ordered tuple of named field updates. There is no open
"dict of fields" form: every update the store can receive is one of the
variants below, which keeps the persistence collaborator's write surface
closed and reviewable.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Union

from member_discipline.domain.models.member import Member, MemberStatus
from member_discipline.domain.models.penalty_state import PenaltyState


@dataclass(frozen=True, eq=True)
class SetStatus:
    value: MemberStatus


@dataclass(frozen=True, eq=True)
class SetWarningCount:
    value: int

    def __post_init__(self) -> None:
        if self.value < 0:
            raise ValueError(f"warning_count must be >= 0, got {self.value}")


@dataclass(frozen=True, eq=True)
class SetNotificationCount:
    value: int

    def __post_init__(self) -> None:
        if self.value < 0:
            raise ValueError(f"notification_count must be >= 0, got {self.value}")


@dataclass(frozen=True, eq=True)
class SetBanReason:
    value: str | None


@dataclass(frozen=True, eq=True)
class SetBannedAt:
    value: datetime | None


@dataclass(frozen=True, eq=True)
class SetLastReactivatedAt:
    value: datetime


FieldUpdate = Union[
    SetStatus,
    SetWarningCount,
    SetNotificationCount,
    SetBanReason,
    SetBannedAt,
    SetLastReactivatedAt,
]

# Maps each update variant to the Member attribute it writes
_FIELD_FOR_UPDATE: dict[type, str] = {
    SetStatus: "status",
    SetWarningCount: "warning_count",
    SetNotificationCount: "notification_count",
    SetBanReason: "ban_reason",
    SetBannedAt: "banned_at",
    SetLastReactivatedAt: "last_reactivated_at",
}


@dataclass(frozen=True, eq=True)
class MemberPatch:
    """Ordered set of field updates for one member write.

    Attributes:
        updates: The field updates, at most one per field.
    """

    updates: tuple[FieldUpdate, ...] = ()

    def __post_init__(self) -> None:
        """Reject duplicate updates for the same field.

        Raises:
            ValueError: If two updates target the same field.
        """
        fields = [_FIELD_FOR_UPDATE[type(update)] for update in self.updates]
        if len(fields) != len(set(fields)):
            raise ValueError(f"MemberPatch has duplicate field updates: {fields}")

    @property
    def is_empty(self) -> bool:
        return not self.updates

    @property
    def field_names(self) -> list[str]:
        """Names of the member fields this patch writes, in order."""
        return [_FIELD_FOR_UPDATE[type(update)] for update in self.updates]

    def apply_to(self, member: Member) -> Member:
        """Return a new Member with every update applied.

        Args:
            member: The member to patch.

        Returns:
            The patched member (the input is never mutated).
        """
        changes = {
            _FIELD_FOR_UPDATE[type(update)]: update.value for update in self.updates
        }
        return replace(member, **changes)

    @classmethod
    def between(
        cls,
        old: PenaltyState,
        new: PenaltyState,
        now: datetime | None = None,
    ) -> MemberPatch:
        """Derive the minimal patch turning ``old`` into ``new``.

        Ban and reactivation transitions also stamp ``banned_at`` and
        ``last_reactivated_at`` when ``now`` is given.

        Args:
            old: Penalty state read from the store.
            new: Penalty state computed by the escalation policy.
            now: Timestamp used for the ban/reactivation stamps.

        Returns:
            MemberPatch with only the fields that changed.
        """
        updates: list[FieldUpdate] = []
        if new.status != old.status:
            updates.append(SetStatus(new.status))
        if new.warning_count != old.warning_count:
            updates.append(SetWarningCount(new.warning_count))
        if new.notification_count != old.notification_count:
            updates.append(SetNotificationCount(new.notification_count))
        if new.ban_reason != old.ban_reason:
            updates.append(SetBanReason(new.ban_reason))

        if now is not None and new.status != old.status:
            if new.status == MemberStatus.BANNED:
                updates.append(SetBannedAt(now))
            elif old.status == MemberStatus.BANNED:
                updates.append(SetBannedAt(None))
                updates.append(SetLastReactivatedAt(now))

        return cls(updates=tuple(updates))
