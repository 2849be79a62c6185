"""Principal resolution for the HTTP edge."""

from member_discipline.api.auth.principal_auth import get_principal

__all__ = ["get_principal"]
