"""Member action API routes.

FastAPI router for the discipline endpoints used by the admin console:
apply an action, read a member's action history, delete a member.

Error mapping (RFC 7807 problem details):
| Error                          | Status |
|--------------------------------|--------|
| DisciplineValidationError      | 400    |
| JustificationValidationError   | 422    |
| DisciplinePermissionError      | 403    |
| MemberNotFoundError            | 404    |
| InvalidTransitionError         | 409    |
| RetryExhaustedError            | 409    |
| PartialFailureError            | 502    |
| PersistenceUnavailableError    | 503    |

Developer Golden Rules:
1. THIN EDGE - The route resolves the principal and delegates; every rule
   lives in the service
2. FAIL LOUD - Every domain error becomes a problem detail, never a 200
"""

from fastapi import APIRouter, Depends, HTTPException, Request

from member_discipline.api.auth.principal_auth import get_principal
from member_discipline.api.dependencies.member_actions import (
    get_config,
    get_penalty_action_service,
)
from member_discipline.api.models.member_actions import (
    ActionHistoryResponse,
    ActionLogEntryModel,
    DeleteMemberResponse,
    MemberActionErrorResponse,
    MemberActionRequest,
    MemberActionResponse,
)
from member_discipline.application.services.penalty_action_service import (
    PenaltyActionService,
)
from member_discipline.config.discipline_config import DisciplineConfig
from member_discipline.domain.errors import (
    DisciplinePermissionError,
    DisciplineValidationError,
    InvalidTransitionError,
    JustificationValidationError,
    MemberNotFoundError,
    PartialFailureError,
    PersistenceUnavailableError,
    RetryExhaustedError,
)
from member_discipline.domain.exceptions import MemberDisciplineError
from member_discipline.domain.models.principal import Principal

router = APIRouter(prefix="/v1/members", tags=["member-actions"])

_ERROR_RESPONSES: dict[int | str, dict[str, object]] = {
    400: {"model": MemberActionErrorResponse, "description": "Invalid request"},
    403: {
        "model": MemberActionErrorResponse,
        "description": "Self-action or insufficient permission",
    },
    404: {"model": MemberActionErrorResponse, "description": "Member not found"},
    409: {
        "model": MemberActionErrorResponse,
        "description": "Invalid status transition or concurrent modification",
    },
    422: {
        "model": MemberActionErrorResponse,
        "description": "Justification missing or out of bounds",
    },
    502: {
        "model": MemberActionErrorResponse,
        "description": "Action may have partially applied",
    },
    503: {
        "model": MemberActionErrorResponse,
        "description": "Member store or action log unavailable",
    },
}


def _problem(
    request: Request,
    status_code: int,
    error_type: str,
    title: str,
    error: MemberDisciplineError,
    **extensions: object,
) -> dict[str, object]:
    detail: dict[str, object] = {
        "type": f"urn:member-discipline:{error_type}",
        "title": title,
        "status": status_code,
        "detail": str(error),
        "instance": str(request.url),
    }
    detail.update({k: v for k, v in extensions.items() if v is not None})
    return detail


def _to_http_exception(
    error: MemberDisciplineError,
    request: Request,
    config: DisciplineConfig,
) -> HTTPException:
    """Translate a domain error into an RFC 7807 HTTPException."""
    member_id = getattr(error, "member_id", None) or None

    if isinstance(error, DisciplinePermissionError):
        return HTTPException(
            status_code=403,
            detail=_problem(
                request,
                403,
                "permission:" + error.reason.value,
                "Action Not Permitted",
                error,
                member_id=error.target_member_id,
                retryable=False,
            ),
        )
    if isinstance(error, MemberNotFoundError):
        return HTTPException(
            status_code=404,
            detail=_problem(
                request,
                404,
                "member:not-found",
                "Member Not Found",
                error,
                member_id=member_id,
                retryable=False,
            ),
        )
    if isinstance(error, InvalidTransitionError):
        return HTTPException(
            status_code=409,
            detail=_problem(
                request,
                409,
                "member:invalid-transition",
                "Invalid Status Transition",
                error,
                member_id=member_id,
                retryable=False,
            ),
        )
    if isinstance(error, JustificationValidationError):
        return HTTPException(
            status_code=422,
            detail=_problem(
                request,
                422,
                "action:invalid-justification",
                "Invalid Justification",
                error,
                retryable=False,
            ),
        )
    if isinstance(error, DisciplineValidationError):
        return HTTPException(
            status_code=400,
            detail=_problem(
                request,
                400,
                "action:invalid-request",
                "Invalid Request",
                error,
                retryable=False,
            ),
        )
    if isinstance(error, RetryExhaustedError):
        return HTTPException(
            status_code=409,
            detail=_problem(
                request,
                409,
                "member:concurrent-modification",
                "Concurrent Modification",
                error,
                member_id=member_id,
                retryable=True,
            ),
        )
    if isinstance(error, PartialFailureError):
        return HTTPException(
            status_code=502,
            detail=_problem(
                request,
                502,
                "action:partial-failure",
                "Action May Have Partially Applied",
                error,
                member_id=member_id,
                retryable=True,
                stage=error.stage,
                counters_persisted=error.counters_persisted,
                missing_entries=len(error.missing_entries),
            ),
        )
    if isinstance(error, PersistenceUnavailableError):
        retry_after = config.retry_after_seconds
        return HTTPException(
            status_code=503,
            detail=_problem(
                request,
                503,
                "store:unavailable",
                "Member Store Unavailable",
                error,
                retryable=True,
                retry_after=retry_after,
            ),
            headers={"Retry-After": str(retry_after)},
        )
    return HTTPException(
        status_code=500,
        detail=_problem(request, 500, "internal", "Internal Error", error),
    )


@router.post(
    "/{member_id}/actions",
    response_model=MemberActionResponse,
    status_code=200,
    responses=_ERROR_RESPONSES,
    summary="Apply a discipline action to a member",
    description=(
        "Notify, warn, ban, reactivate or reset counters of a member. "
        "Automatic warnings and bans set off by the action are reported in "
        "triggered_automatic_actions."
    ),
)
async def perform_member_action(
    member_id: str,
    request_data: MemberActionRequest,
    request: Request,
    principal: Principal = Depends(get_principal),
    service: PenaltyActionService = Depends(get_penalty_action_service),
    config: DisciplineConfig = Depends(get_config),
) -> MemberActionResponse:
    """Apply a discipline action.

    Args:
        member_id: Target member.
        request_data: Action type and justification.
        request: FastAPI request for error context.
        principal: Resolved acting principal.
        service: Injected penalty action service.
        config: Injected configuration (Retry-After hint).

    Returns:
        MemberActionResponse with the final status and counters.
    """
    try:
        result = await service.perform_action(
            principal=principal,
            target_member_id=member_id,
            action_type=request_data.action_type,
            justification=request_data.justification,
        )
    except MemberDisciplineError as e:
        raise _to_http_exception(e, request, config) from None

    return MemberActionResponse.from_result(result)


@router.get(
    "/{member_id}/actions",
    response_model=ActionHistoryResponse,
    status_code=200,
    responses={
        403: _ERROR_RESPONSES[403],
        503: _ERROR_RESPONSES[503],
    },
    summary="List a member's action history",
)
async def get_member_action_history(
    member_id: str,
    request: Request,
    principal: Principal = Depends(get_principal),
    service: PenaltyActionService = Depends(get_penalty_action_service),
    config: DisciplineConfig = Depends(get_config),
) -> ActionHistoryResponse:
    """Return the member's action log, newest first."""
    try:
        entries = await service.action_history(principal, member_id)
    except MemberDisciplineError as e:
        raise _to_http_exception(e, request, config) from None

    return ActionHistoryResponse(
        member_id=member_id,
        entries=[ActionLogEntryModel.from_entry(entry) for entry in entries],
        total=len(entries),
    )


@router.delete(
    "/{member_id}",
    response_model=DeleteMemberResponse,
    status_code=200,
    responses={
        403: _ERROR_RESPONSES[403],
        404: _ERROR_RESPONSES[404],
        409: _ERROR_RESPONSES[409],
        503: _ERROR_RESPONSES[503],
    },
    summary="Archive and delete a member",
)
async def delete_member(
    member_id: str,
    request: Request,
    principal: Principal = Depends(get_principal),
    service: PenaltyActionService = Depends(get_penalty_action_service),
    config: DisciplineConfig = Depends(get_config),
) -> DeleteMemberResponse:
    """Archive and delete a member in one conditional write. Administrators only."""
    try:
        archived = await service.delete_member(principal, member_id)
    except MemberDisciplineError as e:
        raise _to_http_exception(e, request, config) from None

    return DeleteMemberResponse.from_archived(archived)
