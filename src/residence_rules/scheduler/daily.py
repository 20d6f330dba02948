from __future__ import annotations

import threading
from datetime import date, datetime, time
from typing import Callable, Optional

import structlog

from ..common.clock import Clock

log = structlog.get_logger(__name__)


class DailyScheduler:
    """Runs a job once per calendar day, at or after a time-of-day.

    `tick()` is the whole decision; `run_forever()` only calls it on a poll
    interval. A failed run leaves the day open, so the next tick retries.
    The job itself must be safe to run twice for the same day.
    """

    def __init__(
        self,
        job: Callable[[date], object],
        *,
        clock: Clock,
        run_at: time,
        name: str = "daily_job",
    ):
        self._job = job
        self._clock = clock
        self._run_at = run_at
        self._name = name
        self._last_run_date: Optional[date] = None

    @property
    def last_run_date(self) -> Optional[date]:
        return self._last_run_date

    def is_due(self, now: Optional[datetime] = None) -> bool:
        now = now or self._clock.now()
        return now.time() >= self._run_at and self._last_run_date != now.date()

    def tick(self) -> bool:
        """Run the job if due; True when it ran successfully.

        The clock is read once, so the due check and the job see the same day
        even when a tick straddles midnight.
        """
        now = self._clock.now()
        if not self.is_due(now):
            return False

        today = now.date()
        try:
            result = self._job(today)
        except Exception:
            log.error("scheduled_job_failed", job=self._name, run_date=today.isoformat(), exc_info=True)
            return False

        self._last_run_date = today
        log.info("scheduled_job_ran", job=self._name, run_date=today.isoformat(), result=repr(result))
        return True

    def run_forever(self, stop: threading.Event, *, poll_seconds: float = 30.0) -> None:
        log.info("scheduler_started", job=self._name, run_at=self._run_at.strftime("%H:%M"))
        while not stop.is_set():
            self.tick()
            stop.wait(poll_seconds)
        log.info("scheduler_stopped", job=self._name)
