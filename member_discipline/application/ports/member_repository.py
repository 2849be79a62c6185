"""Member repository port.

This module defines the abstract interface to the hosted document store
that holds member records.

Developer Golden Rules:
1. VERSIONED READS - Every read returns the version token it saw
2. CONDITIONAL WRITES - Every write presents that token back
3. FAIL LOUD - Repository raises on errors, never returns partial data
4. ARCHIVE WITH DELETE - A member is archived in the same conditional
   write that deletes it
"""

from __future__ import annotations

from typing import Protocol

from member_discipline.domain.models.member import (
    ArchivedMember,
    Member,
    MemberSnapshot,
)
from member_discipline.domain.models.member_patch import MemberPatch


class MemberRepositoryProtocol(Protocol):
    """Protocol for member document storage.

    Implementations may use a hosted document database or in-memory storage.
    The store offers no row locks; concurrency is optimistic.

    Collaborator timeouts surface as ``TimeoutError`` and unreachable
    backends as ``ConnectionError``; the counter store translates both.

    Methods:
        save: Store a new member
        read_member: Read a member with its version token
        write_member: Conditionally apply a patch
        archive_and_delete: Conditionally archive and delete a member
    """

    async def save(self, member: Member) -> MemberSnapshot:
        """Store a newly registered member.

        Args:
            member: The member to store.

        Returns:
            Snapshot with the initial version.

        Raises:
            ValueError: If a member with the same id exists.
        """
        ...

    async def read_member(self, member_id: str) -> MemberSnapshot | None:
        """Read a member and its current version.

        Args:
            member_id: The member id.

        Returns:
            The snapshot, or None if the member does not exist.
        """
        ...

    async def write_member(
        self,
        member_id: str,
        patch: MemberPatch,
        expected_version: int,
    ) -> int:
        """Apply a patch if the stored version still matches.

        Args:
            member_id: The member id.
            patch: Named field updates to apply.
            expected_version: Version the caller read.

        Returns:
            The new version after the write.

        Raises:
            MemberNotFoundError: If the member does not exist.
            ConcurrentModificationError: If the stored version changed.
        """
        ...

    async def archive_and_delete(
        self,
        archived: ArchivedMember,
        expected_version: int,
    ) -> None:
        """Archive a member and delete it, if the stored version still matches.

        Both happen in one conditional write (a transaction or batched
        write on a document store): the archive copy is stored only when
        the member is actually removed, so a refused delete leaves no
        archive behind and never replaces an earlier one.

        Args:
            archived: The member as read plus deletion metadata.
            expected_version: Version the caller read.

        Raises:
            MemberNotFoundError: If the member does not exist.
            ConcurrentModificationError: If the stored version changed.
        """
        ...
