"""Application ports - Abstract interfaces for infrastructure adapters.

This module defines the contracts that infrastructure adapters must implement.
Ports enable dependency inversion and make the application layer testable.

Available ports:
- MemberRepositoryProtocol: Versioned member document storage
- ActionLogProtocol: Append-only action log
- MemberNoticeProtocol: Member inbox for notifications
"""

from member_discipline.application.ports.action_log import ActionLogProtocol
from member_discipline.application.ports.member_notice import MemberNoticeProtocol
from member_discipline.application.ports.member_repository import (
    MemberRepositoryProtocol,
)

__all__: list[str] = [
    "ActionLogProtocol",
    "MemberNoticeProtocol",
    "MemberRepositoryProtocol",
]
