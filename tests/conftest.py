"""
Pytest configuration and shared fixtures for member discipline tests.

Testing Standards:
- All async tests use pytest.mark.asyncio (auto mode enabled in pyproject.toml)
- Use AsyncMock for async function mocking
- Unit tests go in tests/unit/
- Integration tests go in tests/integration/
"""

from datetime import datetime

import pytest

from member_discipline.domain.models.principal import Principal
from tests.helpers import FIXED_NOW


@pytest.fixture
def project_version() -> str:
    """Provide the current project version for tests."""
    from member_discipline import __version__

    return __version__


@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def admin() -> Principal:
    """An administrator acting on other members."""
    return Principal(member_id="admin-1", is_admin=True)


@pytest.fixture
def power_user() -> Principal:
    return Principal(member_id="director-1", is_power_user=True, role="Diretor")


@pytest.fixture
def president() -> Principal:
    return Principal(member_id="president-1", role="Presidente")


@pytest.fixture
def plain_member() -> Principal:
    return Principal(member_id="member-9", role="Analista")

