"""Infrastructure stubs for development and testing.

Available stubs:
- MemberRepositoryStub: Versioned in-memory member store with CAS writes
- ActionLogStub: Append-only in-memory action log
- MemberNoticeStub: In-memory member inbox

WARNING: These stubs are NOT for production use.
"""

from member_discipline.infrastructure.stubs.action_log_stub import ActionLogStub
from member_discipline.infrastructure.stubs.member_notice_stub import MemberNoticeStub
from member_discipline.infrastructure.stubs.member_repository_stub import (
    INITIAL_VERSION,
    MemberRepositoryStub,
)

__all__: list[str] = [
    "INITIAL_VERSION",
    "ActionLogStub",
    "MemberNoticeStub",
    "MemberRepositoryStub",
]
