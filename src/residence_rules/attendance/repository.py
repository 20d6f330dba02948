from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get_for_resident_and_date(self, resident_id: int, log_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def has_record(self, resident_id: int, log_date: date) -> bool:
        raise NotImplementedError

    def insert_absent_if_missing(self, resident_id: int, log_date: date) -> bool:
        """Atomically insert an absent row unless one exists for that day.

        Returns True only when a row was written.
        """

        raise NotImplementedError

    def insert_present_if_missing(self, resident_id: int, log_date: date, recorded_at: datetime) -> bool:
        raise NotImplementedError
