from __future__ import annotations

import threading
from datetime import date, datetime, time

from residence_rules.attendance.reconciler import AttendanceReconciler
from residence_rules.core.exceptions import PersistenceError
from residence_rules.scheduler.daily import DailyScheduler


class RecordingJob:
    def __init__(self, *, fail_times: int = 0):
        self.calls: list[date] = []
        self._fail_times = fail_times

    def __call__(self, today: date):
        self.calls.append(today)
        if self._fail_times:
            self._fail_times -= 1
            raise PersistenceError("db down")
        return len(self.calls)


def test_does_not_run_before_configured_time(clock):
    clock.set(datetime(2026, 2, 1, 22, 59))
    job = RecordingJob()

    assert DailyScheduler(job, clock=clock, run_at=time(23, 0)).tick() is False
    assert job.calls == []


def test_runs_once_per_day(clock):
    clock.set(datetime(2026, 2, 1, 23, 0))
    job = RecordingJob()
    scheduler = DailyScheduler(job, clock=clock, run_at=time(23, 0))

    assert scheduler.tick() is True
    clock.advance(minutes=30)
    assert scheduler.tick() is False

    clock.set(datetime(2026, 2, 2, 23, 5))
    assert scheduler.tick() is True
    assert job.calls == [date(2026, 2, 1), date(2026, 2, 2)]


def test_failed_run_is_retried_on_next_tick(clock):
    clock.set(datetime(2026, 2, 1, 23, 0))
    job = RecordingJob(fail_times=1)
    scheduler = DailyScheduler(job, clock=clock, run_at=time(23, 0))

    assert scheduler.tick() is False
    assert scheduler.last_run_date is None

    clock.advance(seconds=30)
    assert scheduler.tick() is True
    assert scheduler.last_run_date == date(2026, 2, 1)


class MidnightClock:
    """now() is just before midnight while today() already reads the next day."""

    def now(self):
        return datetime(2026, 2, 1, 23, 59, 59, 999999)

    def today(self):
        return date(2026, 2, 2)


def test_tick_straddling_midnight_runs_for_the_due_day():
    job = RecordingJob()
    scheduler = DailyScheduler(job, clock=MidnightClock(), run_at=time(23, 0))

    assert scheduler.tick() is True
    assert job.calls == [date(2026, 2, 1)]
    assert scheduler.last_run_date == date(2026, 2, 1)


class Residents:
    def __init__(self, ids):
        self._ids = ids

    def list_active_ids(self):
        return list(self._ids)


class Attendance:
    def __init__(self):
        self.absent: set[tuple[int, date]] = set()

    def insert_absent_if_missing(self, resident_id, log_date):
        if (resident_id, log_date) in self.absent:
            return False
        self.absent.add((resident_id, log_date))
        return True


def test_drives_the_reconciler_with_a_fake_clock(clock):
    attendance = Attendance()
    reconciler = AttendanceReconciler(Residents([1, 2]), attendance)
    scheduler = DailyScheduler(reconciler.reconcile, clock=clock, run_at=time(23, 0))

    clock.set(datetime(2026, 2, 1, 23, 1))
    scheduler.tick()
    # A manual re-trigger for the same day is harmless.
    assert reconciler.reconcile(date(2026, 2, 1)).marked_absent_count == 0
    assert attendance.absent == {(1, date(2026, 2, 1)), (2, date(2026, 2, 1))}


def test_run_forever_stops_on_event(clock):
    clock.set(datetime(2026, 2, 1, 23, 0))
    job = RecordingJob()
    stop = threading.Event()
    scheduler = DailyScheduler(job, clock=clock, run_at=time(23, 0))

    worker = threading.Thread(target=scheduler.run_forever, args=(stop,), kwargs={"poll_seconds": 0.01})
    worker.start()
    stop.set()
    worker.join(timeout=2)

    assert not worker.is_alive()
    assert len(job.calls) <= 1
