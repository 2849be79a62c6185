"""Persistence failure errors.

Both errors here are retryable by the caller (manual retry). Neither is
ever dropped silently.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal

from member_discipline.domain.exceptions import MemberDisciplineError

if TYPE_CHECKING:
    from member_discipline.domain.models.action import ActionLogEntry, ActionResult

PartialFailureStage = Literal["member_write", "action_log", "member_notice"]


class PersistenceUnavailableError(MemberDisciplineError):
    """Raised when the persistence or log collaborator cannot be reached.

    Attributes:
        operation: The collaborator operation that failed.
        retry_after: Suggested seconds before a manual retry.
    """

    retryable: bool = True

    def __init__(
        self,
        operation: str,
        message: str | None = None,
        retry_after: int = 5,
    ) -> None:
        self.operation = operation
        self.retry_after = retry_after
        super().__init__(
            message or f"Unavailable: persistence collaborator failed during {operation}"
        )


class PartialFailureError(MemberDisciplineError):
    """Raised when an action may have applied only partially.

    The caller must warn that the action may have partially applied; the
    member record and the action log can disagree until someone checks.

    Attributes:
        member_id: Target member.
        stage: Where the failure happened.
        counters_persisted: True if the member write was confirmed,
            None if its outcome is unknown.
        result: The computed result (None if the write was not confirmed).
        written_entries: Action log entries that were appended.
        missing_entries: Action log entries that were not appended.
    """

    retryable: bool = True

    def __init__(
        self,
        member_id: str,
        stage: PartialFailureStage,
        counters_persisted: bool | None,
        result: ActionResult | None = None,
        written_entries: tuple[ActionLogEntry, ...] = (),
        missing_entries: tuple[ActionLogEntry, ...] = (),
        cause: str = "",
    ) -> None:
        self.member_id = member_id
        self.stage = stage
        self.counters_persisted = counters_persisted
        self.result = result
        self.written_entries = written_entries
        self.missing_entries = missing_entries
        detail = f": {cause}" if cause else ""
        super().__init__(
            f"PartialFailure: action on member {member_id} may have partially "
            f"applied (failed at {stage}){detail}"
        )


class ActionLogWriteError(PersistenceUnavailableError):
    """Raised when the action log stops accepting entries mid-batch.

    Attributes:
        written_entries: Entries appended before the failure.
        missing_entries: Entries not appended (the failed one first).
    """

    def __init__(
        self,
        written_entries: tuple[ActionLogEntry, ...],
        missing_entries: tuple[ActionLogEntry, ...],
        cause: str = "",
    ) -> None:
        self.written_entries = written_entries
        self.missing_entries = missing_entries
        super().__init__(
            operation="append_log",
            message=(
                f"Unavailable: action log accepted {len(written_entries)} of "
                f"{len(written_entries) + len(missing_entries)} entries"
                + (f": {cause}" if cause else "")
            ),
        )
