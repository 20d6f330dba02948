from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Complaint:
    complaint_id: int
    resident_id: int
    title: str
    admin_reply: Optional[str] = None
    status: str = "pending"
    created_at: Optional[datetime] = None
