from __future__ import annotations

from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_bool
from .repository import ResidentRepository


class MySQLResidentRepository(ResidentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_active_ids(self) -> Sequence[int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id FROM students WHERE is_suspended = FALSE ORDER BY id")
            return [int(r["id"]) for r in fetchall(cur)]

    def is_active(self, resident_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT is_suspended FROM students WHERE id=%s", (int(resident_id),))
            r = fetchone(cur)
            return bool(r) and not normalize_mysql_bool(r["is_suspended"])
