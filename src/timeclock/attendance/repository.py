from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord, Coordinates


class AttendanceRepository(Protocol):
    def get_by_id(self, record_id: str) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def find_open_for_user(self, user_id: int) -> Sequence[AttendanceRecord]:
        """All OPEN records for ``user_id``. More than one means the invariant broke."""

        raise NotImplementedError

    def create(self, record: AttendanceRecord) -> None:
        """Persist a new OPEN record.

        Raises ``AlreadyClockedIn`` if the store itself detects a second open
        record for the same user.
        """

        raise NotImplementedError

    def close(
        self,
        *,
        record_id: str,
        user_id: int,
        out_time: datetime,
        out_coordinates: Coordinates,
    ) -> Optional[AttendanceRecord]:
        """Close the record only if it exists, belongs to ``user_id`` and is OPEN.

        Returns the closed record, or None when any of those conditions fails.
        """

        raise NotImplementedError

    def list_all(self) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_for_user(self, user_id: int, limit: int) -> Sequence[AttendanceRecord]:
        raise NotImplementedError
