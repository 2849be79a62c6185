"""Base exception classes for the member discipline domain layer."""


class MemberDisciplineError(Exception):
    """Base exception for all domain errors.

    All domain-specific exceptions MUST inherit from this class.
    This enables the action orchestrator to act as the single
    translation boundary between internal failures and callers.
    """

    def __init__(self, message: str = "") -> None:
        """Initialize the exception with an optional message.

        Args:
            message: Human-readable error description.
        """
        super().__init__(message)
