from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import PermissionType, RequestStatus


@dataclass(frozen=True)
class PermissionRequest:
    request_id: int
    resident_id: int
    type: PermissionType
    start_date: date
    end_date: date
    reason: str
    status: RequestStatus
    created_at: datetime
    admin_remarks: Optional[str] = None


@dataclass(frozen=True)
class PermissionCandidate:
    """A request that has not been stored yet."""

    resident_id: int
    start_date: date
    end_date: date
