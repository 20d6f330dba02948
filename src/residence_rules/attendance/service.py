from __future__ import annotations

from datetime import date, datetime
from typing import Optional

import structlog

from ..common.clock import Clock, SystemClock
from ..core.exceptions import ValidationError
from ..residents.repository import ResidentRepository
from .model import AttendanceRecord
from .repository import AttendanceRepository

log = structlog.get_logger(__name__)


class AttendanceService:
    """Resident check-in. Shares the conditional insert with the reconciler."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        residents: ResidentRepository,
        *,
        clock: Optional[Clock] = None,
    ):
        self._attendance = attendance
        self._residents = residents
        self._clock = clock or SystemClock()

    def check_in(self, resident_id: int, *, now: Optional[datetime] = None) -> None:
        now = now or self._clock.now()
        today = now.date()

        if not self._residents.is_active(int(resident_id)):
            raise ValidationError("Resident is not active")

        if self._attendance.has_record(int(resident_id), today):
            raise ValidationError(self._already_recorded(int(resident_id), today))

        # The reconciler may still win between the check and the insert.
        if not self._attendance.insert_present_if_missing(int(resident_id), today, now):
            raise ValidationError(self._already_recorded(int(resident_id), today))

        log.info("checked_in", resident_id=int(resident_id), log_date=today.isoformat())

    def _already_recorded(self, resident_id: int, today: date) -> str:
        existing = self._attendance.get_for_resident_and_date(resident_id, today)
        status = existing.status.value if existing else "unknown"
        return f"Attendance for today is already recorded ({status})"

    def get_today_record(self, resident_id: int) -> Optional[AttendanceRecord]:
        return self._attendance.get_for_resident_and_date(int(resident_id), self._clock.today())
