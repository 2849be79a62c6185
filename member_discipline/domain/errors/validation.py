"""Validation errors raised before any mutation."""

from __future__ import annotations

from member_discipline.domain.exceptions import MemberDisciplineError


class DisciplineValidationError(MemberDisciplineError):
    """Base error for rejected requests. Never retried."""

    retryable: bool = False


class JustificationValidationError(DisciplineValidationError):
    """Raised when a justification is missing, too short or too long.

    Attributes:
        length: Length of the stripped justification (0 if missing).
        min_length: Minimum accepted length.
        max_length: Maximum accepted length.
    """

    def __init__(self, length: int, min_length: int, max_length: int) -> None:
        self.length = length
        self.min_length = min_length
        self.max_length = max_length
        super().__init__(
            f"Justification must be between {min_length} and {max_length} "
            f"characters, got {length}"
        )


class InvalidTransitionError(DisciplineValidationError):
    """Raised when an action does not apply to the member's current status.

    Examples: reactivating a member who is not banned, banning a member who
    is already banned.

    Attributes:
        member_id: Target member (empty when raised by the pure policy).
        action_type: Value of the rejected ActionType.
        current_status: Value of the member's status.
    """

    def __init__(
        self,
        action_type: str,
        current_status: str,
        member_id: str = "",
    ) -> None:
        self.member_id = member_id
        self.action_type = action_type
        self.current_status = current_status
        target = f" for member {member_id}" if member_id else ""
        super().__init__(
            f"Invalid transition: '{action_type}' is not allowed while "
            f"status is {current_status}{target}"
        )
