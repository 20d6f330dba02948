from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Daily attendance status stored in attendance_logs."""

    PRESENT = "present"
    ABSENT = "absent"


class PermissionType(str, Enum):
    LATE = "late"
    TRAVEL = "travel"


class RequestStatus(str, Enum):
    """Approval flow status for permission requests."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class ClearanceStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"


class ClearanceStep(str, Enum):
    ROOM_INSPECTION = "room_inspection"
    KEY_RETURN = "key_return"
    DONE = "done"


class RuleViolation(str, Enum):
    """Expected rule failures, returned to callers instead of raised."""

    INVALID_RANGE = "invalid_range"
    OVERLAPPING_REQUEST = "overlapping_request"
    PAST_START_DATE = "past_start_date"
    ALREADY_ACTIVE = "already_active"
