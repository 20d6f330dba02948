from __future__ import annotations

from typing import Optional

from ..common.validators import is_blank
from ..core.exceptions import ValidationError
from ..notifications.dispatcher import NotificationDispatcher
from ..notifications.model import Notification
from .repository import ComplaintRepository


class ComplaintReplyService:
    """Staff reply path: store the reply, then notify the resident.

    If the notification write fails the reply is already stored and the
    error reaches the caller.
    """

    def __init__(self, complaints: ComplaintRepository, dispatcher: NotificationDispatcher):
        self._complaints = complaints
        self._dispatcher = dispatcher

    def reply(self, *, complaint_id: int, reply: Optional[str]) -> Optional[Notification]:
        complaint = self._complaints.get_by_id(int(complaint_id))
        if not complaint:
            raise ValidationError("Complaint not found")

        stored_reply = None if is_blank(reply) else reply.strip()
        if not self._complaints.set_admin_reply(complaint_id=complaint.complaint_id, reply=stored_reply):
            raise ValidationError("Saving the reply failed")

        return self._dispatcher.on_complaint_replied(complaint, stored_reply)
