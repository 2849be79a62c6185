"""Principal resolution from request headers.

The authentication provider sits in front of this service and forwards
the signed-in member's identity and role flags as headers:

- X-Principal-Id: member id of the signed-in user (required)
- X-Principal-Role: role label, e.g. "Presidente" (optional)
- X-Principal-Admin: "true" for administrators (optional)
- X-Principal-Power-User: "true" for power users (optional)
"""

from typing import Annotated

import structlog
from fastapi import Header, HTTPException, Request, status

from member_discipline.domain.models.principal import Principal

logger = structlog.get_logger(__name__)

_TRUE_VALUES = {"1", "true", "yes"}


def _parse_flag(value: str | None) -> bool:
    return value is not None and value.strip().lower() in _TRUE_VALUES


def get_principal(
    request: Request,
    x_principal_id: Annotated[
        str | None,
        Header(description="Member id of the authenticated principal."),
    ] = None,
    x_principal_role: Annotated[
        str | None,
        Header(description="Role label of the principal, e.g. 'Presidente'."),
    ] = None,
    x_principal_admin: Annotated[
        str | None,
        Header(description="'true' if the principal is an administrator."),
    ] = None,
    x_principal_power_user: Annotated[
        str | None,
        Header(description="'true' if the principal is a power user."),
    ] = None,
) -> Principal:
    """Build the acting Principal from identity headers.

    Raises:
        HTTPException 401: If X-Principal-Id is missing or blank.
    """
    if not x_principal_id or not x_principal_id.strip():
        logger.warning(
            "auth_failed",
            reason="missing_principal_id",
            request_ip=request.client.host if request.client else "unknown",
        )
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="X-Principal-Id header is required",
        )

    return Principal(
        member_id=x_principal_id.strip(),
        is_admin=_parse_flag(x_principal_admin),
        is_power_user=_parse_flag(x_principal_power_user),
        role=x_principal_role.strip() if x_principal_role else None,
    )
