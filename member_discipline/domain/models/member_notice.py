"""Member notice model.

Every notification also lands in the member's own inbox as a notice,
so the member sees why they were notified.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

NOTICE_TITLE: str = "Notificação do sistema"
NOTICE_PRIORITY: str = "Média"


@dataclass(frozen=True, eq=True)
class MemberNotice:
    """Inbox entry shown to a notified member.

    Attributes:
        notice_id: Unique identifier.
        member_id: Recipient.
        message: The notification justification.
        created_at: When the notice was created (UTC).
        title: Heading shown in the inbox.
        priority: Display priority label.
        is_new: Unread marker.
    """

    notice_id: UUID
    member_id: str
    message: str
    created_at: datetime
    title: str = NOTICE_TITLE
    priority: str = NOTICE_PRIORITY
    is_new: bool = True
