from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import PermissionType, RequestStatus
from .model import PermissionRequest


class PermissionRepository(Protocol):
    def list_pending_for_resident(self, resident_id: int) -> Sequence[PermissionRequest]:
        """Every pending request of the resident, unpaginated; the overlap check needs all of them."""

        raise NotImplementedError

    def list_for_resident(
        self,
        resident_id: int,
        *,
        status: Optional[RequestStatus] = None,
        limit: Optional[int] = 200,
    ) -> Sequence[PermissionRequest]:
        raise NotImplementedError

    def create(
        self,
        *,
        resident_id: int,
        type: PermissionType,
        start_date: date,
        end_date: date,
        reason: str,
    ) -> PermissionRequest:
        """Insert with status=pending and return the stored row."""

        raise NotImplementedError
