"""Penalty action service: the public entry point for discipline actions.

Orchestrates one discipline action end to end:

1. Ask the permission gate (denial: nothing mutated, nothing logged)
2. Validate the justification (3..500 characters, stripped)
3. Read the member's counters with their version token
4. Run the escalation policy (pure)
5. Persist the resulting patch conditionally on the version read
6. Append one log entry for the request and one per automatic escalation
7. Deliver the member notice for notifications
8. Return the final status and the automatic actions triggered

Developer Golden Rules:
1. GATE BEFORE READ - Permission is checked before anything is read or written
2. CONFLICT MEANS RECOMPUTE - On a version conflict the whole
   read/compute/write cycle is repeated, never blindly overwritten
3. FAIL LOUD - A failure after the write is a PartialFailureError,
   never swallowed
4. SINGLE BOUNDARY - This service is the only place internal failures
   are translated for callers
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timezone
from uuid import UUID, uuid4

import structlog

from member_discipline.application.ports.member_notice import MemberNoticeProtocol
from member_discipline.application.ports.member_repository import (
    MemberRepositoryProtocol,
)
from member_discipline.application.services.action_log_writer import ActionLogWriter
from member_discipline.application.services.base import LoggingMixin
from member_discipline.application.services.counter_store import (
    CounterStore,
    collaborator_call,
)
from member_discipline.config.discipline_config import (
    DEFAULT_DISCIPLINE_CONFIG,
    DisciplineConfig,
)
from member_discipline.domain.errors.concurrent_modification import (
    ConcurrentModificationError,
    RetryExhaustedError,
)
from member_discipline.domain.errors.permission import (
    DisciplinePermissionError,
    InsufficientPermissionError,
)
from member_discipline.domain.errors.persistence import (
    ActionLogWriteError,
    PartialFailureError,
    PersistenceUnavailableError,
)
from member_discipline.domain.errors.validation import (
    DisciplineValidationError,
    InvalidTransitionError,
)
from member_discipline.domain.models.action import (
    ActionLogEntry,
    ActionResult,
    ActionType,
    TriggeredAutomaticAction,
)
from member_discipline.domain.models.member import ArchivedMember
from member_discipline.domain.models.member_notice import MemberNotice
from member_discipline.domain.models.member_patch import MemberPatch
from member_discipline.domain.models.principal import Principal
from member_discipline.domain.services.escalation_policy import (
    PolicyOutcome,
    apply_event,
)
from member_discipline.domain.services.justification import validate_justification
from member_discipline.domain.services.permission_gate import (
    can_view_history,
    ensure_authorized,
)


def _utc_now() -> datetime:
    """Return current UTC time with timezone info."""
    return datetime.now(timezone.utc)


class PenaltyActionService(LoggingMixin):
    """Orchestrates discipline actions against members.

    Safe to call from concurrent request handlers: every call is one
    sequential operation and concurrent writes to the same member are
    resolved through optimistic version checks with bounded retries.
    """

    def __init__(
        self,
        counter_store: CounterStore,
        log_writer: ActionLogWriter,
        member_notices: MemberNoticeProtocol,
        member_repository: MemberRepositoryProtocol,
        config: DisciplineConfig = DEFAULT_DISCIPLINE_CONFIG,
        clock: Callable[[], datetime] = _utc_now,
        id_factory: Callable[[], UUID] = uuid4,
    ) -> None:
        """Initialize the service.

        Args:
            counter_store: Versioned counter access.
            log_writer: Action log writer.
            member_notices: Member inbox for notification notices.
            member_repository: Member storage, used for archive/delete.
            config: Retry bound and related settings.
            clock: Source of timestamps.
            id_factory: Generator for notice ids.
        """
        self._counter_store = counter_store
        self._log_writer = log_writer
        self._member_notices = member_notices
        self._member_repository = member_repository
        self._config = config
        self._clock = clock
        self._id_factory = id_factory
        self._init_logger()

    async def perform_action(
        self,
        principal: Principal,
        target_member_id: str,
        action_type: ActionType,
        justification: str | None = None,
    ) -> ActionResult:
        """Perform a discipline action on a member.

        Args:
            principal: The authenticated actor.
            target_member_id: Member the action applies to.
            action_type: Any action except DELETE (see delete_member).
            justification: Human-entered reason. Optional only for
                counter resets.

        Returns:
            ActionResult with the final status, counters and the automatic
            actions triggered.

        Raises:
            JustificationValidationError: Justification missing or out of bounds.
            SelfActionError: Penalty or reactivation targeting the principal
                themselves, whatever the justification.
            InsufficientPermissionError: Principal lacks the role.
            MemberNotFoundError: Target member does not exist.
            InvalidTransitionError: Action does not apply to current status.
            RetryExhaustedError: Version conflicts outlasted the retry bound.
            PersistenceUnavailableError: Store unreachable before any write.
            PartialFailureError: Failure after the write was attempted.
        """
        log = self._log_operation(
            "perform_action",
            target_member_id=target_member_id,
            action_type=action_type.value,
            principal_id=principal.member_id,
        )

        if action_type == ActionType.DELETE:
            raise DisciplineValidationError(
                "'delete' is not a discipline action; use delete_member"
            )

        try:
            ensure_authorized(principal, target_member_id, action_type)
        except DisciplinePermissionError as e:
            log.warning("member_action_denied", reason=e.reason.value)
            raise

        text = validate_justification(action_type, justification)

        log.info("member_action_started")

        outcome, version, attempts = await self._apply_with_retries(
            target_member_id, action_type, text, log
        )

        now = self._clock()
        entries = self._log_writer.build_entries(
            target_member_id=target_member_id,
            principal_id=principal.member_id,
            action_type=action_type,
            justification=text,
            derived_events=outcome.derived_events,
            now=now,
        )
        result = self._build_result(
            target_member_id, outcome, entries, version, attempts
        )

        try:
            await self._log_writer.write_all(entries)
        except ActionLogWriteError as e:
            log.error(
                "member_action_partially_applied",
                stage="action_log",
                missing_entries=len(e.missing_entries),
            )
            raise PartialFailureError(
                member_id=target_member_id,
                stage="action_log",
                counters_persisted=True,
                result=result,
                written_entries=e.written_entries,
                missing_entries=e.missing_entries,
                cause=str(e),
            ) from e

        if action_type == ActionType.NOTIFICATION:
            await self._deliver_notice(target_member_id, text, now, result, log)

        for automatic in result.triggered_automatic_actions:
            log.warning(
                "automatic_action_triggered",
                automatic_action=automatic.action_type.value,
                reason=automatic.reason,
            )

        log.info(
            "member_action_completed",
            final_status=result.final_status.value,
            warning_count=result.warning_count,
            notification_count=result.notification_count,
            automatic_actions=len(result.triggered_automatic_actions),
            attempts=attempts,
        )
        return result

    async def delete_member(
        self,
        principal: Principal,
        member_id: str,
    ) -> ArchivedMember:
        """Archive a member record and delete it in one conditional write.

        The archive is stored only by the attempt whose delete lands, so a
        conflict or a concurrent delete leaves no stale copy behind.

        Args:
            principal: The authenticated actor (must be an admin).
            member_id: Member to delete.

        Returns:
            The archived copy of the member.

        Raises:
            InsufficientPermissionError: Principal is not an admin.
            MemberNotFoundError: Member does not exist, or another admin
                deleted it first.
            RetryExhaustedError: Version conflicts outlasted the retry bound.
            PersistenceUnavailableError: Store unreachable.
        """
        log = self._log_operation(
            "delete_member",
            target_member_id=member_id,
            principal_id=principal.member_id,
        )
        try:
            ensure_authorized(principal, member_id, ActionType.DELETE)
        except DisciplinePermissionError as e:
            log.warning("member_delete_denied", reason=e.reason.value)
            raise

        for attempt in range(1, self._config.max_attempts + 1):
            snapshot = await self._counter_store.get_counters(member_id)
            archived = ArchivedMember(
                member=snapshot.member,
                deleted_at=self._clock(),
                deleted_by=principal.member_id,
            )
            try:
                with collaborator_call("archive_and_delete"):
                    await self._member_repository.archive_and_delete(
                        archived, snapshot.version
                    )
            except ConcurrentModificationError:
                log.warning("member_delete_conflict_retry", attempt=attempt)
                continue
            log.info("member_deleted", attempts=attempt)
            return archived

        log.error("member_delete_retry_exhausted", attempts=self._config.max_attempts)
        raise RetryExhaustedError(member_id, attempts=self._config.max_attempts)

    async def action_history(
        self,
        principal: Principal,
        member_id: str,
    ) -> list[ActionLogEntry]:
        """List a member's action log, newest first.

        Raises:
            InsufficientPermissionError: Principal may not see this history.
            PersistenceUnavailableError: Log unreachable.
        """
        if not can_view_history(principal, member_id):
            raise InsufficientPermissionError(
                principal_id=principal.member_id,
                target_member_id=member_id,
                action_type="viewHistory",
            )
        return await self._log_writer.history(member_id)

    async def _apply_with_retries(
        self,
        target_member_id: str,
        action_type: ActionType,
        justification: str,
        log: structlog.BoundLogger,
    ) -> tuple[PolicyOutcome, int, int]:
        """Run read/compute/write until the write lands or retries run out.

        Returns:
            Tuple of (policy outcome, new version, attempts used).
        """
        max_attempts = self._config.max_attempts
        for attempt in range(1, max_attempts + 1):
            snapshot = await self._counter_store.get_counters(target_member_id)

            try:
                outcome = apply_event(snapshot.state, action_type, justification)
            except InvalidTransitionError as e:
                raise InvalidTransitionError(
                    e.action_type, e.current_status, member_id=target_member_id
                ) from None

            patch = MemberPatch.between(
                outcome.previous_state, outcome.new_state, now=self._clock()
            )
            try:
                version = await self._counter_store.set_counters(
                    target_member_id, patch, snapshot.version
                )
            except ConcurrentModificationError as e:
                log.warning(
                    "member_action_conflict_retry",
                    attempt=attempt,
                    max_attempts=max_attempts,
                    expected_version=e.expected_version,
                    actual_version=e.actual_version,
                )
                continue
            except PersistenceUnavailableError as e:
                log.error(
                    "member_action_partially_applied",
                    stage="member_write",
                    error=str(e),
                )
                raise PartialFailureError(
                    member_id=target_member_id,
                    stage="member_write",
                    counters_persisted=None,
                    cause=str(e),
                ) from e
            return outcome, version, attempt

        log.error(
            "member_action_retry_exhausted", attempts=max_attempts
        )
        raise RetryExhaustedError(target_member_id, attempts=max_attempts)

    async def _deliver_notice(
        self,
        member_id: str,
        message: str,
        now: datetime,
        result: ActionResult,
        log: structlog.BoundLogger,
    ) -> None:
        notice = MemberNotice(
            notice_id=self._id_factory(),
            member_id=member_id,
            message=message,
            created_at=now,
        )
        try:
            with collaborator_call("deliver_notice"):
                await self._member_notices.deliver(notice)
        except PersistenceUnavailableError as e:
            log.error(
                "member_action_partially_applied",
                stage="member_notice",
                error=str(e),
            )
            raise PartialFailureError(
                member_id=member_id,
                stage="member_notice",
                counters_persisted=True,
                result=result,
                written_entries=result.log_entries,
                cause=str(e),
            ) from e

    @staticmethod
    def _build_result(
        member_id: str,
        outcome: PolicyOutcome,
        entries: tuple[ActionLogEntry, ...],
        version: int,
        attempts: int,
    ) -> ActionResult:
        triggered = tuple(
            TriggeredAutomaticAction(
                action_type=event.event_type.logged_as,
                reason=event.reason,
            )
            for event in outcome.derived_events
        )
        state = outcome.new_state
        return ActionResult(
            member_id=member_id,
            action_type=outcome.action_type,
            final_status=state.status,
            warning_count=state.warning_count,
            notification_count=state.notification_count,
            triggered_automatic_actions=triggered,
            log_entries=entries,
            version=version,
            attempts=attempts,
        )
