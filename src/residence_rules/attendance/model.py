from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional, Tuple

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """One row per resident per day."""

    record_id: int
    resident_id: int
    log_date: date
    status: AttendanceStatus
    recorded_at: Optional[datetime] = None


@dataclass(frozen=True)
class ReconcileReport:
    log_date: date
    active_count: int
    marked_absent_count: int
    failed_resident_ids: Tuple[int, ...] = field(default_factory=tuple)

    @property
    def complete(self) -> bool:
        return not self.failed_resident_ids
