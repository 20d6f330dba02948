from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ..core.enums import ClearanceStatus, ClearanceStep


@dataclass(frozen=True)
class ClearanceRequest:
    request_id: int
    resident_id: int
    status: ClearanceStatus
    room_check_passed: bool
    keys_returned: bool
    initiated_at: datetime

    @property
    def is_open(self) -> bool:
        return self.status == ClearanceStatus.PENDING

    @property
    def current_step(self) -> ClearanceStep:
        if self.status == ClearanceStatus.COMPLETED:
            return ClearanceStep.DONE
        if not self.room_check_passed:
            return ClearanceStep.ROOM_INSPECTION
        if not self.keys_returned:
            return ClearanceStep.KEY_RETURN
        return ClearanceStep.DONE
