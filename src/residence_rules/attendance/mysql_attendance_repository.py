from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import AttendanceRecord
from .repository import AttendanceRepository


class MySQLAttendanceRepository(AttendanceRepository):
    """attendance_logs access.

    Conditional inserts rely on the unique_student_date key over
    (student_id, `date`): the duplicate branch is a no-op, so rowcount is 1
    for a new row and 0 otherwise.
    """

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_resident_and_date(self, resident_id: int, log_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, student_id, `date` AS log_date, status, created_at
                FROM attendance_logs
                WHERE student_id=%s AND `date`=%s
                """,
                (int(resident_id), log_date),
            )
            r = fetchone(cur)
            if not r:
                return None
            return AttendanceRecord(
                record_id=int(r["id"]),
                resident_id=int(r["student_id"]),
                log_date=r["log_date"],
                status=AttendanceStatus(r["status"]),
                recorded_at=r.get("created_at"),
            )

    def has_record(self, resident_id: int, log_date: date) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT 1 AS found FROM attendance_logs WHERE student_id=%s AND `date`=%s LIMIT 1",
                (int(resident_id), log_date),
            )
            return fetchone(cur) is not None

    def insert_absent_if_missing(self, resident_id: int, log_date: date) -> bool:
        return self._insert_if_missing(
            resident_id=resident_id,
            log_date=log_date,
            status=AttendanceStatus.ABSENT,
            recorded_at=None,
        )

    def insert_present_if_missing(self, resident_id: int, log_date: date, recorded_at: datetime) -> bool:
        return self._insert_if_missing(
            resident_id=resident_id,
            log_date=log_date,
            status=AttendanceStatus.PRESENT,
            recorded_at=recorded_at,
        )

    def _insert_if_missing(
        self,
        *,
        resident_id: int,
        log_date: date,
        status: AttendanceStatus,
        recorded_at: Optional[datetime],
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_logs(student_id, `date`, status, created_at)
                VALUES(%s,%s,%s,COALESCE(%s, CURRENT_TIMESTAMP))
                ON DUPLICATE KEY UPDATE student_id=student_id
                """,
                (int(resident_id), log_date, status.value, recorded_at),
            )
            return cur.rowcount == 1
