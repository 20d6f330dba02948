"""Date-range rules for new permission requests.

Everything here is pure: callers load the resident's pending requests and
decide what to do with the result.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional

from ..core.enums import RequestStatus, RuleViolation
from .model import PermissionCandidate, PermissionRequest


@dataclass(frozen=True)
class ValidationResult:
    violation: Optional[RuleViolation] = None
    conflicting_request_id: Optional[int] = None

    @property
    def accepted(self) -> bool:
        return self.violation is None


ACCEPTED = ValidationResult()


def intervals_overlap(a_start: date, a_end: date, b_start: date, b_end: date) -> bool:
    """Closed intervals: sharing a single boundary day counts."""
    return a_start <= b_end and a_end >= b_start


def validate(candidate: PermissionCandidate, existing_pending: Iterable[PermissionRequest]) -> ValidationResult:
    if candidate.end_date < candidate.start_date:
        return ValidationResult(violation=RuleViolation.INVALID_RANGE)

    for existing in existing_pending:
        # Approved/rejected requests never block.
        if existing.status != RequestStatus.PENDING or existing.resident_id != candidate.resident_id:
            continue
        if intervals_overlap(candidate.start_date, candidate.end_date, existing.start_date, existing.end_date):
            return ValidationResult(
                violation=RuleViolation.OVERLAPPING_REQUEST,
                conflicting_request_id=existing.request_id,
            )

    return ACCEPTED
