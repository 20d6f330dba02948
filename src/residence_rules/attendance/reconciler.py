from __future__ import annotations

from datetime import date

import structlog

from ..core.exceptions import PersistenceError
from ..residents.repository import ResidentRepository
from .model import ReconcileReport
from .repository import AttendanceRepository

log = structlog.get_logger(__name__)


class AttendanceReconciler:
    """Nightly job: every active resident without a record today is absent.

    Each insert is conditional at write time, so a check-in committed while
    the job runs is never overwritten and a second run for the same day
    marks nobody. A failure for one resident is logged and skipped; the next
    run picks that resident up again.
    """

    def __init__(self, residents: ResidentRepository, attendance: AttendanceRepository):
        self._residents = residents
        self._attendance = attendance

    def reconcile(self, today: date) -> ReconcileReport:
        try:
            active_ids = list(self._residents.list_active_ids())
        except PersistenceError:
            log.error("reconcile_aborted", operation="reconcile", log_date=today.isoformat(), exc_info=True)
            raise

        marked = 0
        failed: list[int] = []
        for resident_id in active_ids:
            try:
                if self._attendance.insert_absent_if_missing(resident_id, today):
                    marked += 1
            except PersistenceError:
                failed.append(resident_id)
                log.warning(
                    "absence_insert_failed",
                    operation="reconcile",
                    resident_id=resident_id,
                    log_date=today.isoformat(),
                    exc_info=True,
                )

        report = ReconcileReport(
            log_date=today,
            active_count=len(active_ids),
            marked_absent_count=marked,
            failed_resident_ids=tuple(failed),
        )
        log.info(
            "reconcile_finished",
            log_date=today.isoformat(),
            active=report.active_count,
            marked_absent=report.marked_absent_count,
            failed=len(failed),
        )
        return report
