"""Escalation policy domain service.

This module is the penalty state machine. It is a pure function of the
current penalty state and one requested event: it returns the next state
and the automatic events the thresholds generated. It never persists,
logs or notifies anything; the action orchestrator does that.

Escalation Rules:
| Event              | Effect                                   | Cascade                          |
|--------------------|------------------------------------------|----------------------------------|
| notification       | notification_count += 1                  | new count % 3 == 0 -> autoWarning |
| warning/autoWarning| warning_count += 1                       | count >= 3 and not banned -> autoBan |
| ban/autoBan        | status = BANNED, ban_reason set          | none                             |
| reactivate         | ACTIVE, ban_reason cleared, counters 0   | none (only from BANNED)          |
| clearWarnings      | warning_count = 0                        | none                             |
| clearNotifications | notification_count = 0                   | none                             |
| clearAll           | both counters 0                          | none                             |

Cascades are bounded: notification -> at most one autoWarning -> at most
one autoBan. A ban has no further cascade.

The notification counter is cumulative: an automatic warning does not
reset it, so later automatic warnings fire at 6, 9, ... This mirrors the
behaviour members already see ("progress toward next warning" is
``notification_count % 3``) and is pending product sign-off.
"""

from __future__ import annotations

from dataclasses import dataclass

from member_discipline.domain.errors.validation import InvalidTransitionError
from member_discipline.domain.models.action import (
    AUTO_BAN_REASON,
    AUTO_WARNING_REASON,
    ActionType,
    DerivedEvent,
    DerivedEventType,
)
from member_discipline.domain.models.member import MemberStatus
from member_discipline.domain.models.penalty_state import (
    NOTIFICATIONS_PER_AUTO_WARNING,
    WARNINGS_PER_AUTO_BAN,
    PenaltyState,
)


@dataclass(frozen=True, eq=True)
class PolicyOutcome:
    """Result of applying one event to a penalty state.

    Attributes:
        action_type: The requested event.
        previous_state: State before the event.
        new_state: State after the event and all its cascades.
        derived_events: Automatic events, in the order they were applied.
    """

    action_type: ActionType
    previous_state: PenaltyState
    new_state: PenaltyState
    derived_events: tuple[DerivedEvent, ...] = ()

    @property
    def changed(self) -> bool:
        return self.new_state != self.previous_state


def apply_event(
    state: PenaltyState,
    action_type: ActionType,
    justification: str | None = None,
) -> PolicyOutcome:
    """Apply a requested event to a penalty state.

    Args:
        state: Current penalty state of the member.
        action_type: The requested event. DELETE is not a penalty event.
        justification: Manual justification; becomes the ban reason for
            manual bans.

    Returns:
        PolicyOutcome with the new state and the derived events.

    Raises:
        InvalidTransitionError: On ban of a banned member, reactivation of a
            member who is not banned, or a non-penalty action type.

    Examples:
        >>> s = PenaltyState(MemberStatus.ACTIVE, warning_count=0, notification_count=2)
        >>> out = apply_event(s, ActionType.NOTIFICATION)
        >>> (out.new_state.notification_count, out.new_state.warning_count)
        (3, 1)
        >>> [e.event_type.value for e in out.derived_events]
        ['autoWarning']
    """
    derived: list[DerivedEvent] = []

    if action_type == ActionType.NOTIFICATION:
        new_state = _notify(state, derived)
    elif action_type == ActionType.WARNING:
        new_state = _warn(state, derived)
    elif action_type == ActionType.BAN:
        if state.status == MemberStatus.BANNED:
            raise InvalidTransitionError(action_type.value, state.status.value)
        new_state = _ban(state, justification)
    elif action_type == ActionType.REACTIVATE:
        if state.status != MemberStatus.BANNED:
            raise InvalidTransitionError(action_type.value, state.status.value)
        new_state = PenaltyState(
            status=MemberStatus.ACTIVE,
            warning_count=0,
            notification_count=0,
            ban_reason=None,
        )
    elif action_type == ActionType.CLEAR_WARNINGS:
        new_state = state.evolve(warning_count=0)
    elif action_type == ActionType.CLEAR_NOTIFICATIONS:
        new_state = state.evolve(notification_count=0)
    elif action_type == ActionType.CLEAR_ALL:
        new_state = state.evolve(warning_count=0, notification_count=0)
    else:
        raise InvalidTransitionError(action_type.value, state.status.value)

    return PolicyOutcome(
        action_type=action_type,
        previous_state=state,
        new_state=new_state,
        derived_events=tuple(derived),
    )


def triggers_auto_warning(notification_count: int) -> bool:
    """Check whether a notification count fires an automatic warning.

    Examples:
        >>> [n for n in range(1, 10) if triggers_auto_warning(n)]
        [3, 6, 9]
    """
    return notification_count > 0 and notification_count % NOTIFICATIONS_PER_AUTO_WARNING == 0


def triggers_auto_ban(state: PenaltyState) -> bool:
    """Check whether a state must be banned automatically."""
    return (
        state.warning_count >= WARNINGS_PER_AUTO_BAN
        and state.status != MemberStatus.BANNED
    )


def _notify(state: PenaltyState, derived: list[DerivedEvent]) -> PenaltyState:
    new_state = state.evolve(notification_count=state.notification_count + 1)
    if triggers_auto_warning(new_state.notification_count):
        derived.append(DerivedEvent(DerivedEventType.AUTO_WARNING, AUTO_WARNING_REASON))
        new_state = _warn(new_state, derived)
    return new_state


def _warn(state: PenaltyState, derived: list[DerivedEvent]) -> PenaltyState:
    new_state = state.evolve(warning_count=state.warning_count + 1)
    if triggers_auto_ban(new_state):
        derived.append(DerivedEvent(DerivedEventType.AUTO_BAN, AUTO_BAN_REASON))
        new_state = _ban(new_state, AUTO_BAN_REASON)
    return new_state


def _ban(state: PenaltyState, reason: str | None) -> PenaltyState:
    # Counters are kept as they are on ban
    return state.evolve(status=MemberStatus.BANNED, ban_reason=reason)
