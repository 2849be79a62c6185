"""Member notice stub implementation (in-memory inbox)."""

from __future__ import annotations

from member_discipline.application.ports.member_notice import MemberNoticeProtocol
from member_discipline.domain.models.member_notice import MemberNotice


class MemberNoticeStub(MemberNoticeProtocol):
    """In-memory stub implementation of MemberNoticeProtocol.

    Attributes:
        fail_with: When set, deliver raises this exception.
    """

    def __init__(self) -> None:
        self._notices: list[MemberNotice] = []
        self.fail_with: Exception | None = None

    async def deliver(self, notice: MemberNotice) -> None:
        if self.fail_with is not None:
            raise self.fail_with
        self._notices.append(notice)

    async def list_for_member(self, member_id: str) -> list[MemberNotice]:
        return [n for n in reversed(self._notices) if n.member_id == member_id]

    def clear(self) -> None:
        """Clear all stored data (for testing)."""
        self._notices.clear()
        self.fail_with = None
