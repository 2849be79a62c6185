"""Principal model: the already-authenticated actor invoking an action.

The core never authenticates. The identity collaborator resolves the
principal and it is passed explicitly into every operation.
"""

from __future__ import annotations

from dataclasses import dataclass

# Role labels that carry the counter-clearing right.
# The role list of the organization calls the same office "Presidente Executivo".
PRESIDENT_ROLES: frozenset[str] = frozenset({"Presidente", "Presidente Executivo"})


@dataclass(frozen=True, eq=True)
class Principal:
    """The actor behind a discipline operation.

    Attributes:
        member_id: The actor's own member id (used for self-action checks).
        is_admin: Administrator flag.
        is_power_user: Power-user flag (Presidente, Diretor or Head).
        role: Role label, if known.
    """

    member_id: str
    is_admin: bool = False
    is_power_user: bool = False
    role: str | None = None

    def __post_init__(self) -> None:
        if not self.member_id:
            raise ValueError("Principal member_id must not be empty")

    @property
    def is_president(self) -> bool:
        return self.role in PRESIDENT_ROLES

    @property
    def can_discipline(self) -> bool:
        """Whether the actor may notify, warn, ban or reactivate."""
        return self.is_admin or self.is_power_user

    @property
    def can_clear_counters(self) -> bool:
        """Whether the actor may zero warning/notification counters."""
        return self.is_admin or self.is_president
