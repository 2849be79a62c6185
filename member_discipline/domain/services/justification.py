"""Justification validator domain service.

Manual actions carry a human-entered reason. The console shows a counter
and disables the submit button, but the core enforces the bounds itself.
"""

from __future__ import annotations

from member_discipline.domain.errors.validation import JustificationValidationError
from member_discipline.domain.models.action import (
    DEFAULT_RESET_JUSTIFICATIONS,
    ActionType,
)

MIN_JUSTIFICATION_LENGTH: int = 3
MAX_JUSTIFICATION_LENGTH: int = 500


def validate_justification(action_type: ActionType, justification: str | None) -> str:
    """Validate and normalise the justification for an action.

    Counter resets may omit the justification; the standard reset text is
    recorded instead. Every other action requires 3 to 500 characters after
    stripping surrounding whitespace.

    Args:
        action_type: The requested action.
        justification: Text entered by the principal, or None.

    Returns:
        The stripped justification, or the default reset text.

    Raises:
        JustificationValidationError: If the text is missing or out of bounds.

    Examples:
        >>> validate_justification(ActionType.WARNING, "  late twice  ")
        'late twice'
        >>> validate_justification(ActionType.CLEAR_WARNINGS, None)
        'Limpeza manual de advertências'
    """
    text = (justification or "").strip()

    if not text and action_type in DEFAULT_RESET_JUSTIFICATIONS:
        return DEFAULT_RESET_JUSTIFICATIONS[action_type]

    if not MIN_JUSTIFICATION_LENGTH <= len(text) <= MAX_JUSTIFICATION_LENGTH:
        raise JustificationValidationError(
            length=len(text),
            min_length=MIN_JUSTIFICATION_LENGTH,
            max_length=MAX_JUSTIFICATION_LENGTH,
        )
    return text
