from __future__ import annotations

from typing import Optional, Protocol

from .model import Complaint


class ComplaintRepository(Protocol):
    def get_by_id(self, complaint_id: int) -> Optional[Complaint]:
        raise NotImplementedError

    def set_admin_reply(self, *, complaint_id: int, reply: Optional[str]) -> bool:
        raise NotImplementedError
