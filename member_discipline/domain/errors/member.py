"""Member lookup errors."""

from __future__ import annotations

from member_discipline.domain.exceptions import MemberDisciplineError


class MemberNotFoundError(MemberDisciplineError):
    """Raised when the target member does not exist.

    Typically the member was deleted between the console loading and the
    action being submitted. Not retryable: the caller should refresh.

    Attributes:
        member_id: The missing member id.
    """

    retryable: bool = False

    def __init__(self, member_id: str, message: str | None = None) -> None:
        self.member_id = member_id
        super().__init__(message or f"Member not found: {member_id}")
