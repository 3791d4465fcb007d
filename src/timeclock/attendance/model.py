from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import to_iso
from ..core.enums import RecordState


@dataclass(frozen=True)
class Coordinates:
    latitude: float
    longitude: float

    def to_dict(self) -> dict:
        return {"latitude": self.latitude, "longitude": self.longitude}


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one clock-in/clock-out session.

    OPEN while ``out_time`` is None; CLOSED once it is set. Instances are
    immutable; closing produces a new instance.
    """

    id: str
    user_id: int
    project_id: int
    in_time: datetime
    in_coordinates: Coordinates
    out_time: Optional[datetime] = None
    out_coordinates: Optional[Coordinates] = None

    @property
    def state(self) -> RecordState:
        return RecordState.OPEN if self.out_time is None else RecordState.CLOSED

    @property
    def is_open(self) -> bool:
        return self.out_time is None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "userId": self.user_id,
            "projectId": self.project_id,
            "inTime": to_iso(self.in_time),
            "outTime": to_iso(self.out_time),
            "inCoordinates": self.in_coordinates.to_dict(),
            "outCoordinates": self.out_coordinates.to_dict() if self.out_coordinates else None,
        }


@dataclass(frozen=True)
class AttendanceRow:
    """Read-model for the admin listing: a record joined with display names."""

    record: AttendanceRecord
    staff_name: str
    project_name: str

    def to_dict(self) -> dict:
        out = self.record.to_dict()
        out["staffName"] = self.staff_name
        out["projectName"] = self.project_name
        return out
