from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..core.enums import ClearanceStatus
from ..core.exceptions import PersistenceError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, is_duplicate_key, normalize_mysql_bool
from .model import ClearanceRequest
from .repository import ClearanceRepository

_COLUMNS = "id, student_id, status, room_check_passed, keys_returned, initiated_at"


def _to_model(r: dict) -> ClearanceRequest:
    return ClearanceRequest(
        request_id=int(r["id"]),
        resident_id=int(r["student_id"]),
        status=ClearanceStatus(str(r["status"]).lower()),
        room_check_passed=normalize_mysql_bool(r["room_check_passed"]),
        keys_returned=normalize_mysql_bool(r["keys_returned"]),
        initiated_at=r["initiated_at"],
    )


class MySQLClearanceRepository(ClearanceRepository):
    """clearance_requests access.

    The table is expected to carry a unique key over the open marker
    (student_id while status='pending', NULL otherwise) so two concurrent
    initiations cannot both insert.
    """

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_open_for_resident(self, resident_id: int) -> Optional[ClearanceRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM clearance_requests
                WHERE student_id=%s AND status=%s
                ORDER BY initiated_at DESC
                LIMIT 1
                """,
                (int(resident_id), ClearanceStatus.PENDING.value),
            )
            r = fetchone(cur)
            return _to_model(r) if r else None

    def get_latest_for_resident(self, resident_id: int) -> Optional[ClearanceRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM clearance_requests
                WHERE student_id=%s
                ORDER BY initiated_at DESC, id DESC
                LIMIT 1
                """,
                (int(resident_id),),
            )
            r = fetchone(cur)
            return _to_model(r) if r else None

    def create_for_resident(self, resident_id: int, *, initiated_at: datetime) -> Optional[ClearanceRequest]:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO clearance_requests(student_id, status, room_check_passed, keys_returned, initiated_at)
                    VALUES(%s,%s,FALSE,FALSE,%s)
                    """,
                    (int(resident_id), ClearanceStatus.PENDING.value, initiated_at),
                )
                new_id = int(cur.lastrowid)
        except PersistenceError as exc:
            if is_duplicate_key(exc):
                return None
            raise

        return ClearanceRequest(
            request_id=new_id,
            resident_id=int(resident_id),
            status=ClearanceStatus.PENDING,
            room_check_passed=False,
            keys_returned=False,
            initiated_at=initiated_at,
        )

    def update_checks(
        self,
        *,
        request_id: int,
        room_check_passed: bool,
        keys_returned: bool,
        status: ClearanceStatus,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE clearance_requests
                SET room_check_passed=%s, keys_returned=%s, status=%s
                WHERE id=%s AND status=%s
                """,
                (
                    bool(room_check_passed),
                    bool(keys_returned),
                    status.value,
                    int(request_id),
                    ClearanceStatus.PENDING.value,
                ),
            )
            if cur.rowcount > 0:
                return True
            # MySQL reports 0 affected rows for an UPDATE that changes nothing.
            cur.execute("SELECT status FROM clearance_requests WHERE id=%s", (int(request_id),))
            r = fetchone(cur)
            return bool(r) and str(r["status"]).lower() == ClearanceStatus.PENDING.value
