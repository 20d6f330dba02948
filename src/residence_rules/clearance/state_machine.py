from __future__ import annotations

from typing import Optional

import structlog

from ..common.clock import Clock, SystemClock
from ..core.enums import ClearanceStatus, RuleViolation
from ..core.exceptions import ValidationError
from ..core.results import Outcome
from .model import ClearanceRequest
from .repository import ClearanceRepository

log = structlog.get_logger(__name__)


class ClearanceStateMachine:
    """Checkout lifecycle: none -> pending -> completed.

    At most one pending request per resident. A completed request does not
    block a new one.
    """

    def __init__(self, clearances: ClearanceRepository, *, clock: Optional[Clock] = None):
        self._clearances = clearances
        self._clock = clock or SystemClock()

    def initiate(self, resident_id: int) -> Outcome[ClearanceRequest]:
        resident_id = int(resident_id)
        if self._clearances.get_open_for_resident(resident_id) is not None:
            return Outcome.refused(RuleViolation.ALREADY_ACTIVE)

        created = self._clearances.create_for_resident(resident_id, initiated_at=self._clock.now())
        if created is None:
            # Lost a race against a concurrent initiate.
            return Outcome.refused(RuleViolation.ALREADY_ACTIVE)

        log.info("clearance_initiated", resident_id=resident_id, request_id=created.request_id)
        return Outcome.success(created)

    def status(self, resident_id: int) -> Optional[ClearanceRequest]:
        return self._clearances.get_latest_for_resident(int(resident_id))

    def record_checks(
        self,
        resident_id: int,
        *,
        room_check_passed: Optional[bool] = None,
        keys_returned: Optional[bool] = None,
    ) -> ClearanceRequest:
        current = self._clearances.get_open_for_resident(int(resident_id))
        if current is None:
            raise ValidationError("No open clearance request")

        room_ok = current.room_check_passed if room_check_passed is None else bool(room_check_passed)
        keys_ok = current.keys_returned if keys_returned is None else bool(keys_returned)
        if (room_ok, keys_ok) == (current.room_check_passed, current.keys_returned):
            return current

        status = ClearanceStatus.COMPLETED if room_ok and keys_ok else ClearanceStatus.PENDING
        if not self._clearances.update_checks(
            request_id=current.request_id,
            room_check_passed=room_ok,
            keys_returned=keys_ok,
            status=status,
        ):
            raise ValidationError("Clearance request was already closed")

        if status == ClearanceStatus.COMPLETED:
            log.info("clearance_completed", resident_id=int(resident_id), request_id=current.request_id)

        return ClearanceRequest(
            request_id=current.request_id,
            resident_id=current.resident_id,
            status=status,
            room_check_passed=room_ok,
            keys_returned=keys_ok,
            initiated_at=current.initiated_at,
        )
