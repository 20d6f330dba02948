from __future__ import annotations

from typing import Optional

import structlog

from ..common.clock import Clock, SystemClock
from ..common.validators import is_blank
from ..complaints.model import Complaint
from ..core.exceptions import PersistenceError
from .model import NewNotification, Notification
from .repository import NotificationRepository

log = structlog.get_logger(__name__)

REPLY_TITLE = "New Reply"


class NotificationDispatcher:
    """Turns a staff reply on a complaint into a resident notification.

    Called once per reply from the reply path; it does not deduplicate
    repeated calls for the same reply.
    """

    def __init__(
        self,
        notifications: NotificationRepository,
        *,
        clock: Optional[Clock] = None,
        sender_name: Optional[str] = None,
    ):
        self._notifications = notifications
        self._clock = clock or SystemClock()
        self._sender_name = sender_name

    def on_complaint_replied(self, complaint: Complaint, new_reply: Optional[str]) -> Optional[Notification]:
        if is_blank(new_reply):
            return None

        pending = NewNotification(
            resident_id=complaint.resident_id,
            title=REPLY_TITLE,
            body=f'Staff replied to your complaint "{complaint.title}".',
            complaint_id=complaint.complaint_id,
            created_at=self._clock.now(),
            sender_name=self._sender_name,
        )
        try:
            created = self._notifications.create(pending)
        except PersistenceError:
            log.error(
                "notification_write_failed",
                operation="on_complaint_replied",
                resident_id=complaint.resident_id,
                complaint_id=complaint.complaint_id,
                exc_info=True,
            )
            raise

        log.info(
            "notification_created",
            resident_id=complaint.resident_id,
            complaint_id=complaint.complaint_id,
            notification_id=created.notification_id,
        )
        return created
