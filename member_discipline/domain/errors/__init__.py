"""Domain errors for member discipline.

Provides specific exception classes for different failure scenarios.
All exceptions inherit from MemberDisciplineError.
"""

from member_discipline.domain.errors.concurrent_modification import (
    ConcurrentModificationError,
    RetryExhaustedError,
)
from member_discipline.domain.errors.member import MemberNotFoundError
from member_discipline.domain.errors.permission import (
    DenialReason,
    DisciplinePermissionError,
    InsufficientPermissionError,
    SelfActionError,
)
from member_discipline.domain.errors.persistence import (
    ActionLogWriteError,
    PartialFailureError,
    PersistenceUnavailableError,
)
from member_discipline.domain.errors.validation import (
    DisciplineValidationError,
    InvalidTransitionError,
    JustificationValidationError,
)

__all__: list[str] = [
    "ActionLogWriteError",
    "ConcurrentModificationError",
    "DenialReason",
    "DisciplinePermissionError",
    "DisciplineValidationError",
    "InsufficientPermissionError",
    "InvalidTransitionError",
    "JustificationValidationError",
    "MemberNotFoundError",
    "PartialFailureError",
    "PersistenceUnavailableError",
    "RetryExhaustedError",
    "SelfActionError",
]
