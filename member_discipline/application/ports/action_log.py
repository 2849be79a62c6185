"""Action log port.

Append-only storage for ActionLogEntry records. Entries are never
contended, mutated or deleted.
"""

from __future__ import annotations

from typing import Protocol

from member_discipline.domain.models.action import ActionLogEntry


class ActionLogProtocol(Protocol):
    """Protocol for the action log collection.

    Methods:
        append: Store one entry
        list_for_member: Entries targeting a member, newest first
    """

    async def append(self, entry: ActionLogEntry) -> None:
        """Append one entry.

        Raises:
            TimeoutError: If the collaborator timed out.
            ConnectionError: If the collaborator is unreachable.
        """
        ...

    async def list_for_member(self, member_id: str) -> list[ActionLogEntry]:
        """List entries targeting a member, newest first."""
        ...
