from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_bool
from .model import NewNotification, Notification
from .repository import NotificationRepository

_COLUMNS = "id, student_id, title, body, complaint_id, is_unread, type, sender_name, created_at"


def _to_model(r: dict) -> Notification:
    return Notification(
        notification_id=int(r["id"]),
        resident_id=int(r["student_id"]),
        title=r["title"],
        body=r["body"],
        complaint_id=int(r["complaint_id"]) if r.get("complaint_id") is not None else None,
        created_at=r["created_at"],
        is_read=not normalize_mysql_bool(r["is_unread"]),
        type=r.get("type") or "",
        sender_name=r.get("sender_name"),
    )


class MySQLNotificationRepository(NotificationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, notification: NewNotification) -> Notification:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO notifications(student_id, title, body, complaint_id, is_unread, type, sender_name, created_at)
                VALUES(%s,%s,%s,%s,TRUE,%s,%s,%s)
                """,
                (
                    int(notification.resident_id),
                    notification.title,
                    notification.body,
                    notification.complaint_id,
                    notification.type,
                    notification.sender_name,
                    notification.created_at,
                ),
            )
            return Notification(
                notification_id=int(cur.lastrowid),
                resident_id=int(notification.resident_id),
                title=notification.title,
                body=notification.body,
                complaint_id=notification.complaint_id,
                created_at=notification.created_at,
                is_read=False,
                type=notification.type,
                sender_name=notification.sender_name,
            )

    def get_by_id(self, notification_id: int) -> Optional[Notification]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM notifications WHERE id=%s", (int(notification_id),))
            r = fetchone(cur)
            return _to_model(r) if r else None

    def list_for_resident(self, resident_id: int, *, limit: int = 100) -> Sequence[Notification]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM notifications
                WHERE student_id=%s
                ORDER BY created_at DESC
                LIMIT %s
                """,
                (int(resident_id), int(limit)),
            )
            return [_to_model(r) for r in fetchall(cur)]

    def mark_read(self, notification_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE notifications SET is_unread=FALSE WHERE id=%s", (int(notification_id),))
            return cur.rowcount > 0
