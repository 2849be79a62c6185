"""Action log writer service.

Builds and appends the immutable audit records for every discipline
action: one manual entry for the requested action followed by one
automatic entry per escalation the policy derived.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from datetime import datetime
from uuid import UUID, uuid4

from member_discipline.application.ports.action_log import ActionLogProtocol
from member_discipline.application.services.base import LoggingMixin
from member_discipline.application.services.counter_store import collaborator_call
from member_discipline.domain.errors.persistence import (
    ActionLogWriteError,
    PersistenceUnavailableError,
)
from member_discipline.domain.models.action import (
    SYSTEM_PRINCIPAL_ID,
    ActionLogEntry,
    ActionType,
    DerivedEvent,
)


class ActionLogWriter(LoggingMixin):
    """Append-only writer for action log entries."""

    def __init__(
        self,
        action_log: ActionLogProtocol,
        id_factory: Callable[[], UUID] = uuid4,
    ) -> None:
        """Initialize the writer.

        Args:
            action_log: Action log storage.
            id_factory: Generator for entry ids.
        """
        self._action_log = action_log
        self._id_factory = id_factory
        self._init_logger()

    def build_entries(
        self,
        target_member_id: str,
        principal_id: str,
        action_type: ActionType,
        justification: str,
        derived_events: Sequence[DerivedEvent],
        now: datetime,
    ) -> tuple[ActionLogEntry, ...]:
        """Build the entries for one action, primary entry first.

        Args:
            target_member_id: Member the action applied to.
            principal_id: Who requested the action.
            action_type: The requested action.
            justification: Validated justification of the request.
            derived_events: Automatic events, in policy order.
            now: Timestamp shared by every entry of the action.

        Returns:
            Tuple of entries in the order they must be appended.
        """
        primary = ActionLogEntry(
            entry_id=self._id_factory(),
            target_member_id=target_member_id,
            action_type=action_type,
            justification=justification,
            is_automatic=False,
            acting_principal_id=principal_id,
            timestamp=now,
        )
        automatic = tuple(
            ActionLogEntry(
                entry_id=self._id_factory(),
                target_member_id=target_member_id,
                action_type=event.event_type.logged_as,
                justification=event.reason,
                is_automatic=True,
                acting_principal_id=SYSTEM_PRINCIPAL_ID,
                timestamp=now,
                triggered_by=principal_id,
            )
            for event in derived_events
        )
        return (primary, *automatic)

    async def write_all(self, entries: Sequence[ActionLogEntry]) -> int:
        """Append entries in order.

        Args:
            entries: Entries as returned by build_entries.

        Returns:
            Number of entries appended.

        Raises:
            ActionLogWriteError: If an append fails; carries the entries
                written so far and the ones still missing.
        """
        written: list[ActionLogEntry] = []
        for index, entry in enumerate(entries):
            try:
                with collaborator_call("append_log"):
                    await self._action_log.append(entry)
            except PersistenceUnavailableError as e:
                self._log_operation(
                    "write_all",
                    member_id=entry.target_member_id,
                ).error(
                    "action_log_append_failed",
                    written=len(written),
                    missing=len(entries) - index,
                    error=str(e),
                )
                raise ActionLogWriteError(
                    written_entries=tuple(written),
                    missing_entries=tuple(entries[index:]),
                    cause=str(e),
                ) from e
            written.append(entry)
        return len(written)

    async def history(self, member_id: str) -> list[ActionLogEntry]:
        """List entries targeting a member, newest first.

        Raises:
            PersistenceUnavailableError: If the log cannot be reached.
        """
        with collaborator_call("list_log"):
            return await self._action_log.list_for_member(member_id)
