from __future__ import annotations

from typing import Sequence

from ..core.exceptions import ValidationError
from .model import Notification
from .repository import NotificationRepository


class NotificationInbox:
    """Resident-facing reads over notifications."""

    def __init__(self, notifications: NotificationRepository):
        self._notifications = notifications

    def list_for_resident(self, resident_id: int, *, limit: int = 100) -> Sequence[Notification]:
        return self._notifications.list_for_resident(int(resident_id), limit=limit)

    def mark_read(self, *, notification_id: int, resident_id: int) -> None:
        existing = self._notifications.get_by_id(int(notification_id))
        if not existing or existing.resident_id != int(resident_id):
            raise ValidationError("Notification not found")
        if existing.is_read:
            return
        self._notifications.mark_read(int(notification_id))
