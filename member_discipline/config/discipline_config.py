"""Member discipline configuration.

Operational settings with environment variable overrides. The escalation
thresholds (3 notifications per warning, 3 warnings per ban) are business
rules and are intentionally not configurable here.

Environment Variables:
- MEMBER_ACTION_MAX_CONFLICT_RETRIES: Re-attempts after an optimistic
  concurrency conflict before giving up (default: 3)
- MEMBER_ACTION_RETRY_AFTER_SECONDS: Retry-After hint returned when the
  store is unavailable (default: 5)
- APP_ENV: "production" for JSON logs, anything else for console logs
  (default: development)
"""

from __future__ import annotations

import os
from dataclasses import dataclass


def _get_int_env(key: str, default: int) -> int:
    """Get integer environment variable with default.

    Args:
        key: Environment variable name.
        default: Default value if not set or invalid.

    Returns:
        Parsed integer value or default.
    """
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


@dataclass(frozen=True)
class DisciplineConfig:
    """Configuration for the action orchestrator and its edge.

    Attributes:
        max_conflict_retries: Re-attempts after a version conflict.
            Total attempts are max_conflict_retries + 1.
        retry_after_seconds: Hint sent to clients when the store is down.
        environment: Deployment environment name.
    """

    max_conflict_retries: int = 3
    retry_after_seconds: int = 5
    environment: str = "development"

    def __post_init__(self) -> None:
        """Validate configuration values.

        Raises:
            ValueError: If a value is out of range.
        """
        if self.max_conflict_retries < 0:
            raise ValueError(
                f"max_conflict_retries must be >= 0, got {self.max_conflict_retries}"
            )
        if self.retry_after_seconds < 1:
            raise ValueError(
                f"retry_after_seconds must be >= 1, got {self.retry_after_seconds}"
            )

    @property
    def max_attempts(self) -> int:
        return self.max_conflict_retries + 1

    @classmethod
    def from_environment(cls) -> DisciplineConfig:
        """Create configuration from environment variables.

        Returns:
            DisciplineConfig with values from the environment or defaults.
        """
        return cls(
            max_conflict_retries=_get_int_env("MEMBER_ACTION_MAX_CONFLICT_RETRIES", 3),
            retry_after_seconds=_get_int_env("MEMBER_ACTION_RETRY_AFTER_SECONDS", 5),
            environment=os.environ.get("APP_ENV", "development"),
        )


DEFAULT_DISCIPLINE_CONFIG = DisciplineConfig()
