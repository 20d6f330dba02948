from __future__ import annotations

from datetime import date, datetime

import pytest

from residence_rules.attendance.reconciler import AttendanceReconciler
from residence_rules.attendance.service import AttendanceService
from residence_rules.core.enums import AttendanceStatus
from residence_rules.core.exceptions import ValidationError

from test_reconciler import InMemoryAttendance, InMemoryResidents


def test_check_in_records_present(clock, fixed_now):
    attendance = InMemoryAttendance()
    svc = AttendanceService(attendance, InMemoryResidents([1]), clock=clock)

    svc.check_in(1)

    rec = svc.get_today_record(1)
    assert rec is not None
    assert rec.status == AttendanceStatus.PRESENT
    assert rec.recorded_at == fixed_now


def test_second_check_in_same_day_is_refused(clock):
    svc = AttendanceService(InMemoryAttendance(), InMemoryResidents([1]), clock=clock)
    svc.check_in(1)

    with pytest.raises(ValidationError):
        svc.check_in(1)


def test_check_in_after_nightly_absence_is_refused():
    attendance = InMemoryAttendance()
    AttendanceReconciler(InMemoryResidents([1]), attendance).reconcile(date(2026, 2, 1))
    svc = AttendanceService(attendance, InMemoryResidents([1]))

    with pytest.raises(ValidationError, match="absent"):
        svc.check_in(1, now=datetime(2026, 2, 1, 23, 30))

    assert attendance.get_for_resident_and_date(1, date(2026, 2, 1)).status == AttendanceStatus.ABSENT


def test_suspended_resident_cannot_check_in(clock):
    svc = AttendanceService(InMemoryAttendance(), InMemoryResidents([1]), clock=clock)

    with pytest.raises(ValidationError):
        svc.check_in(7)


class CountingAttendance(InMemoryAttendance):
    def __init__(self):
        super().__init__()
        self.present_inserts = 0

    def insert_present_if_missing(self, resident_id, log_date, recorded_at):
        self.present_inserts += 1
        return super().insert_present_if_missing(resident_id, log_date, recorded_at)


def test_existing_record_refuses_before_attempting_insert(clock):
    attendance = CountingAttendance()
    svc = AttendanceService(attendance, InMemoryResidents([1]), clock=clock)
    svc.check_in(1)

    with pytest.raises(ValidationError, match="present"):
        svc.check_in(1)

    assert attendance.present_inserts == 1


class RacingAttendance(InMemoryAttendance):
    """The nightly absent row lands between the lookup and the insert."""

    def has_record(self, resident_id, log_date):
        found = super().has_record(resident_id, log_date)
        self.insert_absent_if_missing(resident_id, log_date)
        return found


def test_absence_written_after_lookup_still_refuses_check_in():
    attendance = RacingAttendance()
    svc = AttendanceService(attendance, InMemoryResidents([1]))

    with pytest.raises(ValidationError, match="absent"):
        svc.check_in(1, now=datetime(2026, 2, 1, 23, 0))

    assert attendance.get_for_resident_and_date(1, date(2026, 2, 1)).status == AttendanceStatus.ABSENT
