from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

COMPLAINT_REPLY_TYPE = "complaint_reply"


@dataclass(frozen=True)
class NewNotification:
    resident_id: int
    title: str
    body: str
    complaint_id: Optional[int]
    created_at: datetime
    type: str = COMPLAINT_REPLY_TYPE
    sender_name: Optional[str] = None


@dataclass(frozen=True)
class Notification:
    notification_id: int
    resident_id: int
    title: str
    body: str
    complaint_id: Optional[int]
    created_at: datetime
    is_read: bool = False
    type: str = COMPLAINT_REPLY_TYPE
    sender_name: Optional[str] = None
