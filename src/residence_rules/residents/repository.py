from __future__ import annotations

from typing import Protocol, Sequence


class ResidentRepository(Protocol):
    def list_active_ids(self) -> Sequence[int]:
        """Ids of residents that are not suspended."""

        raise NotImplementedError

    def is_active(self, resident_id: int) -> bool:
        raise NotImplementedError
