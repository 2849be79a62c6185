"""Counter store service.

Get/set access to a member's warning and notification counters (and the
status fields that move with them), backed by the member repository.

Developer Golden Rules:
1. VERSION EVERYTHING - Reads return the version token, writes present it
2. TRANSLATE AT THE EDGE - Collaborator timeouts and connection failures
   become PersistenceUnavailableError here, nowhere else
3. NO BLIND OVERWRITES - A stale version is a Conflict, never a retry here
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass

from member_discipline.application.ports.member_repository import (
    MemberRepositoryProtocol,
)
from member_discipline.application.services.base import LoggingMixin
from member_discipline.domain.errors.member import MemberNotFoundError
from member_discipline.domain.errors.persistence import PersistenceUnavailableError
from member_discipline.domain.models.member import Member, MemberStatus
from member_discipline.domain.models.member_patch import MemberPatch
from member_discipline.domain.models.penalty_state import PenaltyState


@contextmanager
def collaborator_call(operation: str) -> Iterator[None]:
    """Translate collaborator transport failures into domain errors.

    Args:
        operation: Name of the collaborator operation, for the error.

    Raises:
        PersistenceUnavailableError: On TimeoutError or ConnectionError.
    """
    try:
        yield
    except (TimeoutError, ConnectionError) as e:
        raise PersistenceUnavailableError(
            operation=operation,
            message=f"Unavailable: {operation} failed: {e or type(e).__name__}",
        ) from e


@dataclass(frozen=True, eq=True)
class CounterSnapshot:
    """Counters of one member as read, with the version token.

    Attributes:
        member: The full member record that was read.
        version: Store version at read time.
    """

    member: Member
    version: int

    @property
    def state(self) -> PenaltyState:
        return self.member.penalty_state

    @property
    def status(self) -> MemberStatus:
        return self.member.status

    @property
    def warning_count(self) -> int:
        return self.member.warning_count

    @property
    def notification_count(self) -> int:
        return self.member.notification_count


class CounterStore(LoggingMixin):
    """Versioned counter access over the member repository."""

    def __init__(self, member_repository: MemberRepositoryProtocol) -> None:
        """Initialize the counter store.

        Args:
            member_repository: Versioned member document storage.
        """
        self._repository = member_repository
        self._init_logger()

    async def get_counters(self, member_id: str) -> CounterSnapshot:
        """Read a member's counters and version.

        Args:
            member_id: Target member.

        Returns:
            CounterSnapshot with the member and its version.

        Raises:
            MemberNotFoundError: If the member does not exist.
            PersistenceUnavailableError: If the store cannot be reached.
        """
        with collaborator_call("read_member"):
            snapshot = await self._repository.read_member(member_id)
        if snapshot is None:
            raise MemberNotFoundError(member_id)
        return CounterSnapshot(member=snapshot.member, version=snapshot.version)

    async def set_counters(
        self,
        member_id: str,
        patch: MemberPatch,
        expected_version: int,
    ) -> int:
        """Conditionally write a partial update.

        Args:
            member_id: Target member.
            patch: Named field updates.
            expected_version: Version returned by get_counters.

        Returns:
            The new version. An empty patch is not written and the
            expected version is returned unchanged.

        Raises:
            MemberNotFoundError: If the member does not exist.
            ConcurrentModificationError: If the stored version changed.
            PersistenceUnavailableError: If the store cannot be reached.
        """
        log = self._log_operation(
            "set_counters",
            member_id=member_id,
            expected_version=expected_version,
        )
        if patch.is_empty:
            log.debug("counter_write_skipped_empty_patch")
            return expected_version

        with collaborator_call("write_member"):
            new_version = await self._repository.write_member(
                member_id, patch, expected_version
            )
        log.debug(
            "counters_written",
            fields=patch.field_names,
            new_version=new_version,
        )
        return new_version
