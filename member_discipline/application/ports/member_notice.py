"""Member notice port: the notified member's inbox."""

from __future__ import annotations

from typing import Protocol

from member_discipline.domain.models.member_notice import MemberNotice


class MemberNoticeProtocol(Protocol):
    """Protocol for delivering notices to a member's inbox."""

    async def deliver(self, notice: MemberNotice) -> None:
        """Store a notice for its recipient.

        Raises:
            TimeoutError: If the collaborator timed out.
            ConnectionError: If the collaborator is unreachable.
        """
        ...

    async def list_for_member(self, member_id: str) -> list[MemberNotice]:
        """List notices for a member, newest first."""
        ...
