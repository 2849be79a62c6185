"""Member action API request/response models.

Pydantic models for the discipline endpoints of the admin console.

Developer Golden Rules:
1. VALIDATE EARLY - Pydantic handles schema validation (unknown action types)
2. RULES LIVE IN THE DOMAIN - Justification bounds are enforced by the core,
   not duplicated here
3. FAIL LOUD - Errors are returned as RFC 7807 problem details
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated
from uuid import UUID

from pydantic import BaseModel, Field, PlainSerializer

from member_discipline.domain.models.action import (
    ActionLogEntry,
    ActionResult,
    ActionType,
)
from member_discipline.domain.models.member import ArchivedMember

# Custom datetime serializer for ISO 8601 with Z suffix (Pydantic v2)
DateTimeWithZ = Annotated[
    datetime,
    PlainSerializer(
        lambda v: v.isoformat().replace("+00:00", "Z") if v else None, return_type=str
    ),
]


class MemberActionRequest(BaseModel):
    """Request to apply a discipline action to a member.

    Attributes:
        action_type: The action (notification, warning, ban, reactivate,
            clearWarnings, clearNotifications, clearAll).
        justification: Reason entered by the principal. Optional for the
            clear actions only.
    """

    action_type: ActionType = Field(
        ...,
        description="Action to apply",
    )
    justification: str | None = Field(
        default=None,
        description="Reason for the action (3 to 500 characters after trimming)",
    )


class TriggeredAutomaticActionModel(BaseModel):
    """An escalation the action set off, for toast display."""

    action_type: str = Field(..., description="'warning' or 'ban'")
    reason: str = Field(..., description="Standard automatic reason text")


class ActionLogEntryModel(BaseModel):
    """One action log record."""

    entry_id: UUID
    target_member_id: str
    action_type: str
    justification: str
    is_automatic: bool
    acting_principal_id: str
    timestamp: DateTimeWithZ
    triggered_by: str | None = None

    @classmethod
    def from_entry(cls, entry: ActionLogEntry) -> ActionLogEntryModel:
        return cls(
            entry_id=entry.entry_id,
            target_member_id=entry.target_member_id,
            action_type=entry.action_type.value,
            justification=entry.justification,
            is_automatic=entry.is_automatic,
            acting_principal_id=entry.acting_principal_id,
            timestamp=entry.timestamp,
            triggered_by=entry.triggered_by,
        )


class MemberActionResponse(BaseModel):
    """Outcome of a discipline action.

    Attributes:
        member_id: Target member.
        action_type: The requested action.
        final_status: Member status after the action ("Ativo", "Banido", ...).
        warning_count: Warnings after the action.
        notification_count: Notifications after the action.
        triggered_automatic_actions: Automatic warning/ban set off by it.
        log_entries: Entries appended for this action, manual entry first.
        version: Member record version after the write.
    """

    member_id: str
    action_type: str
    final_status: str
    warning_count: int = Field(..., ge=0)
    notification_count: int = Field(..., ge=0)
    triggered_automatic_actions: list[TriggeredAutomaticActionModel] = Field(
        default_factory=list
    )
    log_entries: list[ActionLogEntryModel] = Field(default_factory=list)
    version: int

    @classmethod
    def from_result(cls, result: ActionResult) -> MemberActionResponse:
        return cls(
            member_id=result.member_id,
            action_type=result.action_type.value,
            final_status=result.final_status.value,
            warning_count=result.warning_count,
            notification_count=result.notification_count,
            triggered_automatic_actions=[
                TriggeredAutomaticActionModel(
                    action_type=action.action_type.value,
                    reason=action.reason,
                )
                for action in result.triggered_automatic_actions
            ],
            log_entries=[
                ActionLogEntryModel.from_entry(entry) for entry in result.log_entries
            ],
            version=result.version,
        )


class ActionHistoryResponse(BaseModel):
    """Action log of one member, newest first."""

    member_id: str
    entries: list[ActionLogEntryModel]
    total: int = Field(..., ge=0)


class DeleteMemberResponse(BaseModel):
    """Confirmation that a member was archived and deleted."""

    member_id: str
    name: str
    deleted_at: DateTimeWithZ
    deleted_by: str

    @classmethod
    def from_archived(cls, archived: ArchivedMember) -> DeleteMemberResponse:
        return cls(
            member_id=archived.member.id,
            name=archived.member.name,
            deleted_at=archived.deleted_at,
            deleted_by=archived.deleted_by,
        )


class MemberActionErrorResponse(BaseModel):
    """Error response for member actions (RFC 7807).

    Attributes:
        type: Error type URI.
        title: Human-readable error title.
        status: HTTP status code.
        detail: Detailed error message.
        instance: Request path that caused the error.
        member_id: Target member, when known.
        retryable: Whether a manual retry may succeed.
        retry_after: Seconds to wait before retrying (503).
        stage: Where a partial failure happened (502).
        counters_persisted: Whether the member write was confirmed (502).
        missing_entries: Number of log entries not written (502).
    """

    type: str = Field(..., description="Error type URI")
    title: str = Field(..., description="Human-readable error title")
    status: int = Field(..., description="HTTP status code")
    detail: str = Field(..., description="Detailed error message")
    instance: str = Field(..., description="Request path that caused the error")
    member_id: str | None = None
    retryable: bool | None = None
    retry_after: int | None = None
    stage: str | None = None
    counters_persisted: bool | None = None
    missing_entries: int | None = None
