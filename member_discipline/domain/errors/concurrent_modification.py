"""Optimistic concurrency errors for member writes.

The backing store is a remote document service without row locks, so
every counter write is conditional on the version that was read.
"""

from __future__ import annotations

from member_discipline.domain.exceptions import MemberDisciplineError


class ConcurrentModificationError(MemberDisciplineError):
    """Raised when a conditional write finds a newer version in the store.

    This is a recoverable error: the orchestrator re-reads the member,
    recomputes the policy and tries again, up to its retry bound.

    Attributes:
        member_id: Member whose write collided.
        expected_version: Version presented by the writer.
        actual_version: Version found in the store.
    """

    def __init__(
        self,
        member_id: str,
        expected_version: int,
        actual_version: int,
    ) -> None:
        self.member_id = member_id
        self.expected_version = expected_version
        self.actual_version = actual_version
        super().__init__(
            f"Conflict: member {member_id} changed concurrently "
            f"(expected version {expected_version}, found {actual_version})"
        )


class RetryExhaustedError(MemberDisciplineError):
    """Raised when conflicts persist after every allowed retry.

    Attributes:
        member_id: Member whose writes kept colliding.
        attempts: Number of read/compute/write cycles attempted.
    """

    retryable: bool = True

    def __init__(self, member_id: str, attempts: int) -> None:
        self.member_id = member_id
        self.attempts = attempts
        super().__init__(
            f"RetryExhausted: member {member_id} kept changing concurrently; "
            f"gave up after {attempts} attempts"
        )
