"""Member repository stub implementation.

This module provides an in-memory stub implementation of
MemberRepositoryProtocol for development and testing purposes.

Every stored member carries a version that is bumped on each write, and
writes and archive-deletes only land when the caller presents the current version.
Transport failures can be injected to exercise the error paths.
"""

from __future__ import annotations

import asyncio

from member_discipline.application.ports.member_repository import (
    MemberRepositoryProtocol,
)
from member_discipline.domain.errors.concurrent_modification import (
    ConcurrentModificationError,
)
from member_discipline.domain.errors.member import MemberNotFoundError
from member_discipline.domain.models.member import (
    ArchivedMember,
    Member,
    MemberSnapshot,
)
from member_discipline.domain.models.member_patch import MemberPatch

INITIAL_VERSION: int = 1


class MemberRepositoryStub(MemberRepositoryProtocol):
    """In-memory stub implementation of MemberRepositoryProtocol.

    It is NOT suitable for production use.

    Attributes:
        _members: Mapping of member id to (member, version).
        _archive: Archived copies keyed by member id.
        fail_reads: When set, read_member raises this exception.
        fail_writes: When set, write_member raises this exception.
    """

    def __init__(self) -> None:
        """Initialize the stub with empty storage."""
        self._members: dict[str, tuple[Member, int]] = {}
        self._archive: dict[str, ArchivedMember] = {}
        # Serialises compare-and-set so a version check and its write are atomic
        self._cas_lock = asyncio.Lock()
        self.fail_reads: Exception | None = None
        self.fail_writes: Exception | None = None
        self.write_calls: int = 0

    async def save(self, member: Member) -> MemberSnapshot:
        """Store a new member at the initial version.

        Raises:
            ValueError: If the member id already exists.
        """
        async with self._cas_lock:
            if member.id in self._members:
                raise ValueError(f"Member already exists: {member.id}")
            self._members[member.id] = (member, INITIAL_VERSION)
        return MemberSnapshot(member=member, version=INITIAL_VERSION)

    async def read_member(self, member_id: str) -> MemberSnapshot | None:
        if self.fail_reads is not None:
            raise self.fail_reads
        stored = self._members.get(member_id)
        if stored is None:
            return None
        member, version = stored
        return MemberSnapshot(member=member, version=version)

    async def write_member(
        self,
        member_id: str,
        patch: MemberPatch,
        expected_version: int,
    ) -> int:
        """Apply a patch atomically if the version still matches.

        Raises:
            MemberNotFoundError: If the member does not exist.
            ConcurrentModificationError: If the stored version moved on.
        """
        self.write_calls += 1
        if self.fail_writes is not None:
            raise self.fail_writes
        async with self._cas_lock:
            stored = self._members.get(member_id)
            if stored is None:
                raise MemberNotFoundError(member_id)
            member, version = stored
            if version != expected_version:
                raise ConcurrentModificationError(
                    member_id=member_id,
                    expected_version=expected_version,
                    actual_version=version,
                )
            new_version = version + 1
            self._members[member_id] = (patch.apply_to(member), new_version)
            return new_version

    async def archive_and_delete(
        self,
        archived: ArchivedMember,
        expected_version: int,
    ) -> None:
        """Archive and delete a member atomically if the version still matches.

        Raises:
            MemberNotFoundError: If the member does not exist.
            ConcurrentModificationError: If the stored version moved on.
        """
        member_id = archived.member.id
        async with self._cas_lock:
            stored = self._members.get(member_id)
            if stored is None:
                raise MemberNotFoundError(member_id)
            _, version = stored
            if version != expected_version:
                raise ConcurrentModificationError(
                    member_id=member_id,
                    expected_version=expected_version,
                    actual_version=version,
                )
            self._archive[member_id] = archived
            del self._members[member_id]

    # Test helpers

    def get_archived(self, member_id: str) -> ArchivedMember | None:
        """Return the archived copy of a deleted member, if any."""
        return self._archive.get(member_id)

    def version_of(self, member_id: str) -> int | None:
        stored = self._members.get(member_id)
        return stored[1] if stored else None

    def clear(self) -> None:
        """Clear all stored data (for testing)."""
        self._members.clear()
        self._archive.clear()
        self.fail_reads = None
        self.fail_writes = None
        self.write_calls = 0
