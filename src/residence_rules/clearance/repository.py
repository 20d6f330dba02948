from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol

from ..core.enums import ClearanceStatus
from .model import ClearanceRequest


class ClearanceRepository(Protocol):
    def get_open_for_resident(self, resident_id: int) -> Optional[ClearanceRequest]:
        raise NotImplementedError

    def get_latest_for_resident(self, resident_id: int) -> Optional[ClearanceRequest]:
        raise NotImplementedError

    def create_for_resident(self, resident_id: int, *, initiated_at: datetime) -> Optional[ClearanceRequest]:
        """Insert a pending request; None when the store already holds an open one."""

        raise NotImplementedError

    def update_checks(
        self,
        *,
        request_id: int,
        room_check_passed: bool,
        keys_returned: bool,
        status: ClearanceStatus,
    ) -> bool:
        raise NotImplementedError
