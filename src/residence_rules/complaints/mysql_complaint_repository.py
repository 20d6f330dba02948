from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import Complaint
from .repository import ComplaintRepository


class MySQLComplaintRepository(ComplaintRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, complaint_id: int) -> Optional[Complaint]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, student_id, title, admin_reply, status, created_at
                FROM complaints
                WHERE id=%s
                """,
                (int(complaint_id),),
            )
            r = fetchone(cur)
            if not r:
                return None
            return Complaint(
                complaint_id=int(r["id"]),
                resident_id=int(r["student_id"]),
                title=r["title"],
                admin_reply=r.get("admin_reply"),
                status=r.get("status") or "pending",
                created_at=r.get("created_at"),
            )

    def set_admin_reply(self, *, complaint_id: int, reply: Optional[str]) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE complaints SET admin_reply=%s, updated_at=CURRENT_TIMESTAMP WHERE id=%s",
                (reply, int(complaint_id)),
            )
            if cur.rowcount > 0:
                return True
            # Same reply within the same second changes nothing: 0 affected rows.
            cur.execute("SELECT 1 AS found FROM complaints WHERE id=%s", (int(complaint_id),))
            return fetchone(cur) is not None
