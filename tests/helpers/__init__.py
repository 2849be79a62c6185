"""Test helpers for member discipline tests.

Usage:
    from tests.helpers import make_member, build_service
"""

from tests.helpers.member_factory import FIXED_NOW, make_member
from tests.helpers.service_factory import StubBundle, build_service

__all__ = ["FIXED_NOW", "StubBundle", "build_service", "make_member"]
