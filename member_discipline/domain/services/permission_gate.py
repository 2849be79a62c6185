"""Permission gate domain service.

Decides whether a principal may invoke an action on a target member.

Permission Table:
| Action                                   | Allowed for              | Self-target |
|------------------------------------------|--------------------------|-------------|
| notification, warning, ban               | admin or power user      | forbidden   |
| reactivate                               | admin or power user      | forbidden   |
| clearWarnings, clearNotifications, clearAll | admin or Presidente   | allowed     |
| delete                                   | admin                    | allowed     |

The self-target check runs before the role check, so a self-targeted
penalty or reactivation is refused as SelfAction whatever the principal's
role. A banned administrator cannot lift their own ban.
"""

from __future__ import annotations

from dataclasses import dataclass

from member_discipline.domain.errors.permission import (
    DenialReason,
    InsufficientPermissionError,
    SelfActionError,
)
from member_discipline.domain.models.action import ActionType
from member_discipline.domain.models.principal import Principal


@dataclass(frozen=True, eq=True)
class Authorization:
    """Gate decision.

    Attributes:
        allowed: True if the action may proceed.
        reason: Why it was denied, None when allowed.
    """

    allowed: bool
    reason: DenialReason | None = None


ALLOW = Authorization(allowed=True)


def authorize(
    principal: Principal,
    target_member_id: str,
    action_type: ActionType,
) -> Authorization:
    """Decide whether ``principal`` may perform ``action_type`` on a member.

    Args:
        principal: The already-authenticated actor.
        target_member_id: Member the action targets.
        action_type: The requested action.

    Returns:
        ALLOW, or a denial carrying SELF_ACTION / INSUFFICIENT_PERMISSION.

    Examples:
        >>> admin = Principal(member_id="a1", is_admin=True)
        >>> authorize(admin, "a1", ActionType.WARNING).reason.value
        'SelfAction'
        >>> authorize(admin, "m2", ActionType.CLEAR_ALL).allowed
        True
    """
    if action_type.forbids_self_target:
        if principal.member_id == target_member_id:
            return Authorization(allowed=False, reason=DenialReason.SELF_ACTION)
        if principal.can_discipline:
            return ALLOW
    elif action_type.is_counter_reset:
        if principal.can_clear_counters:
            return ALLOW
    elif action_type == ActionType.DELETE:
        if principal.is_admin:
            return ALLOW

    return Authorization(allowed=False, reason=DenialReason.INSUFFICIENT_PERMISSION)


def ensure_authorized(
    principal: Principal,
    target_member_id: str,
    action_type: ActionType,
) -> None:
    """Raise if the gate denies the action.

    Raises:
        SelfActionError: If a penalty or reactivation targets the principal.
        InsufficientPermissionError: If the principal lacks the role.
    """
    decision = authorize(principal, target_member_id, action_type)
    if decision.allowed:
        return
    if decision.reason == DenialReason.SELF_ACTION:
        raise SelfActionError(principal.member_id, action_type.value)
    raise InsufficientPermissionError(
        principal_id=principal.member_id,
        target_member_id=target_member_id,
        action_type=action_type.value,
    )


def can_view_history(principal: Principal, target_member_id: str) -> bool:
    """Whether the principal may read a member's action history.

    Admins and power users see everyone's history; members see their own.

    Examples:
        >>> can_view_history(Principal(member_id="m1"), "m1")
        True
        >>> can_view_history(Principal(member_id="m1"), "m2")
        False
    """
    return principal.can_discipline or principal.member_id == target_member_id
