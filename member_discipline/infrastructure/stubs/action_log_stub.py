"""Action log stub implementation.

In-memory, append-only action log for development and testing. A
failure can be injected after a given number of successful appends to
exercise partially written batches.
"""

from __future__ import annotations

from member_discipline.application.ports.action_log import ActionLogProtocol
from member_discipline.domain.models.action import ActionLogEntry


class ActionLogStub(ActionLogProtocol):
    """In-memory stub implementation of ActionLogProtocol.

    Attributes:
        fail_after: When set, appends beyond this many successful ones
            raise ConnectionError.
    """

    def __init__(self, fail_after: int | None = None) -> None:
        self._entries: list[ActionLogEntry] = []
        self.fail_after = fail_after

    async def append(self, entry: ActionLogEntry) -> None:
        if self.fail_after is not None and len(self._entries) >= self.fail_after:
            raise ConnectionError("action log unreachable")
        self._entries.append(entry)

    async def list_for_member(self, member_id: str) -> list[ActionLogEntry]:
        # Entries of one action share a timestamp; reverse append order keeps
        # automatic entries ahead of the manual entry that triggered them.
        matching = [e for e in self._entries if e.target_member_id == member_id]
        return list(reversed(matching))

    @property
    def entries(self) -> list[ActionLogEntry]:
        """All entries in append order (for testing)."""
        return list(self._entries)

    def clear(self) -> None:
        """Clear all stored data (for testing)."""
        self._entries.clear()
        self.fail_after = None
