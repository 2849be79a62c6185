"""Domain services for member discipline (pure functions, no I/O)."""

from member_discipline.domain.services.escalation_policy import (
    PolicyOutcome,
    apply_event,
)
from member_discipline.domain.services.justification import validate_justification
from member_discipline.domain.services.permission_gate import (
    Authorization,
    authorize,
    ensure_authorized,
)

__all__: list[str] = [
    "Authorization",
    "PolicyOutcome",
    "apply_event",
    "authorize",
    "ensure_authorized",
    "validate_justification",
]
