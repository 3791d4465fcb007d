from __future__ import annotations

import threading
from dataclasses import replace
from datetime import datetime
from typing import Optional, Sequence

from ..core.exceptions import AlreadyClockedIn
from .model import AttendanceRecord, Coordinates
from .repository import AttendanceRepository


class InMemoryAttendanceRepository(AttendanceRepository):
    """Process-local attendance store. Contents are lost on restart."""

    def __init__(self):
        self._lock = threading.Lock()
        self._records: dict[str, AttendanceRecord] = {}

    def get_by_id(self, record_id: str) -> Optional[AttendanceRecord]:
        return self._records.get(record_id)

    def find_open_for_user(self, user_id: int) -> Sequence[AttendanceRecord]:
        with self._lock:
            return [r for r in self._records.values() if r.user_id == user_id and r.is_open]

    def create(self, record: AttendanceRecord) -> None:
        with self._lock:
            if record.id in self._records:
                raise ValueError(f"Duplicate attendance record id {record.id!r}")
            if any(r.user_id == record.user_id and r.is_open for r in self._records.values()):
                raise AlreadyClockedIn()
            self._records[record.id] = record

    def close(
        self,
        *,
        record_id: str,
        user_id: int,
        out_time: datetime,
        out_coordinates: Coordinates,
    ) -> Optional[AttendanceRecord]:
        with self._lock:
            current = self._records.get(record_id)
            if current is None or current.user_id != user_id or not current.is_open:
                return None
            closed = replace(current, out_time=out_time, out_coordinates=out_coordinates)
            self._records[record_id] = closed
            return closed

    def list_all(self) -> Sequence[AttendanceRecord]:
        with self._lock:
            return list(self._records.values())

    def list_for_user(self, user_id: int, limit: int) -> Sequence[AttendanceRecord]:
        with self._lock:
            items = [r for r in self._records.values() if r.user_id == user_id]
        items.sort(key=lambda r: r.in_time, reverse=True)
        return items[: int(limit)]
