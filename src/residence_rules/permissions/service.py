from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

import structlog

from ..common.clock import Clock, SystemClock
from ..common.validators import require_choice, require_non_empty
from ..core.enums import PermissionType, RequestStatus, RuleViolation
from ..core.results import Outcome
from .model import PermissionCandidate, PermissionRequest
from .repository import PermissionRepository
from .validator import validate

log = structlog.get_logger(__name__)


class PermissionService:
    def __init__(self, permissions: PermissionRepository, *, clock: Optional[Clock] = None):
        self._permissions = permissions
        self._clock = clock or SystemClock()

    def submit(
        self,
        *,
        resident_id: int,
        type: str,
        start_date: date,
        end_date: date,
        reason: str,
    ) -> Outcome[PermissionRequest]:
        permission_type = require_choice(type, PermissionType, "type")
        reason = require_non_empty(reason, "reason")

        if start_date < self._clock.today():
            return Outcome.refused(RuleViolation.PAST_START_DATE)

        candidate = PermissionCandidate(resident_id=int(resident_id), start_date=start_date, end_date=end_date)
        pending = self._permissions.list_pending_for_resident(int(resident_id))
        result = validate(candidate, pending)
        if not result.accepted:
            log.info(
                "permission_refused",
                resident_id=int(resident_id),
                violation=result.violation.value,
                conflicting_request_id=result.conflicting_request_id,
            )
            return Outcome.refused(result.violation)

        created = self._permissions.create(
            resident_id=int(resident_id),
            type=permission_type,
            start_date=start_date,
            end_date=end_date,
            reason=reason,
        )
        log.info("permission_submitted", resident_id=int(resident_id), request_id=created.request_id)
        return Outcome.success(created)

    def list_for_resident(
        self,
        resident_id: int,
        *,
        status: Optional[RequestStatus] = None,
    ) -> Sequence[PermissionRequest]:
        return self._permissions.list_for_resident(int(resident_id), status=status)
