from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import PermissionType, RequestStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import PermissionRequest
from .repository import PermissionRepository

_COLUMNS = "id, student_id, type, start_date, end_date, reason, status, admin_remarks, created_at"


def _to_model(r: dict) -> PermissionRequest:
    return PermissionRequest(
        request_id=int(r["id"]),
        resident_id=int(r["student_id"]),
        type=PermissionType(str(r["type"]).lower()),
        start_date=r["start_date"],
        end_date=r["end_date"],
        reason=r["reason"],
        status=RequestStatus(str(r["status"]).lower()),
        created_at=r["created_at"],
        admin_remarks=r.get("admin_remarks"),
    )


class MySQLPermissionRepository(PermissionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_pending_for_resident(self, resident_id: int) -> Sequence[PermissionRequest]:
        return self.list_for_resident(resident_id, status=RequestStatus.PENDING, limit=None)

    def list_for_resident(
        self,
        resident_id: int,
        *,
        status: Optional[RequestStatus] = None,
        limit: Optional[int] = 200,
    ) -> Sequence[PermissionRequest]:
        clauses = ["student_id=%s"]
        params: list[object] = [int(resident_id)]
        if status is not None:
            clauses.append("status=%s")
            params.append(status.value)
        limit_sql = ""
        if limit is not None:
            limit_sql = "LIMIT %s"
            params.append(int(limit))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM permissions
                WHERE {" AND ".join(clauses)}
                ORDER BY start_date DESC
                {limit_sql}
                """,
                tuple(params),
            )
            return [_to_model(r) for r in fetchall(cur)]

    def create(
        self,
        *,
        resident_id: int,
        type: PermissionType,
        start_date: date,
        end_date: date,
        reason: str,
    ) -> PermissionRequest:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO permissions(student_id, type, start_date, end_date, reason, status)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (int(resident_id), type.value, start_date, end_date, reason, RequestStatus.PENDING.value),
            )
            new_id = int(cur.lastrowid)
            cur.execute(f"SELECT {_COLUMNS} FROM permissions WHERE id=%s", (new_id,))
            return _to_model(fetchone(cur))
