"""Permission errors for discipline operations.

Permission errors are never retried. They are surfaced verbatim to the
caller and guarantee that no state was mutated and no log was written.
"""

from __future__ import annotations

from enum import Enum

from member_discipline.domain.exceptions import MemberDisciplineError


class DenialReason(str, Enum):
    """Why the permission gate refused an action."""

    SELF_ACTION = "SelfAction"
    INSUFFICIENT_PERMISSION = "InsufficientPermission"


class DisciplinePermissionError(MemberDisciplineError):
    """Base error for refused discipline operations.

    Attributes:
        reason: The denial reason.
        principal_id: Member id of the refused actor.
        target_member_id: Member the action targeted.
        action_type: The refused action type value.
    """

    reason: DenialReason = DenialReason.INSUFFICIENT_PERMISSION

    def __init__(
        self,
        principal_id: str,
        target_member_id: str,
        action_type: str,
        message: str | None = None,
    ) -> None:
        """Initialize with the actor, target and refused action.

        Args:
            principal_id: Member id of the acting principal.
            target_member_id: Member id of the target.
            action_type: Value of the refused ActionType.
            message: Optional custom message.
        """
        self.principal_id = principal_id
        self.target_member_id = target_member_id
        self.action_type = action_type
        super().__init__(
            message
            or f"{self.reason.value}: {principal_id} may not perform "
            f"'{action_type}' on member {target_member_id}"
        )


class SelfActionError(DisciplinePermissionError):
    """Raised when a principal tries to notify, warn or ban themselves."""

    reason = DenialReason.SELF_ACTION

    def __init__(self, principal_id: str, action_type: str) -> None:
        super().__init__(
            principal_id=principal_id,
            target_member_id=principal_id,
            action_type=action_type,
            message=(
                f"SelfAction: member {principal_id} cannot apply "
                f"'{action_type}' to themselves"
            ),
        )


class InsufficientPermissionError(DisciplinePermissionError):
    """Raised when the principal's role flags do not allow the action."""

    reason = DenialReason.INSUFFICIENT_PERMISSION
