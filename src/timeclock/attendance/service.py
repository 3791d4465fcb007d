from __future__ import annotations

import logging
import uuid
from typing import Optional, Sequence

from ..common.datetime_utils import Clock, now_utc
from ..common.validators import require_range
from ..core.constants import RECORD_ID_PREFIX, UNASSIGNED_PROJECT_NAME, UNKNOWN_STAFF_NAME
from ..core.exceptions import AlreadyClockedIn, InvariantViolation, RecordNotFound, ValidationError
from ..projects.repository import ProjectRepository
from ..users.repository import UserRepository
from .locks import UserLocks
from .model import AttendanceRecord, AttendanceRow, Coordinates
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceLedger:
    """Owns attendance records and the one-open-record-per-user invariant.

    ``clock_in`` and ``clock_out`` run under a per-user lock so the
    check-then-write steps cannot interleave for the same user.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        users: UserRepository,
        projects: ProjectRepository,
        *,
        clock: Optional[Clock] = None,
        locks: Optional[UserLocks] = None,
    ):
        self._attendance = attendance
        self._users = users
        self._projects = projects
        self._clock = clock or now_utc
        self._locks = locks or UserLocks()

    def get_active(self, user_id: int) -> Optional[AttendanceRecord]:
        open_records = self._attendance.find_open_for_user(int(user_id))
        if len(open_records) > 1:
            logger.critical(
                "invariant violated: user %s has %d open records (%s)",
                user_id,
                len(open_records),
                ", ".join(r.id for r in open_records),
            )
            raise InvariantViolation(f"Multiple open attendance records for user {user_id}")
        return open_records[0] if open_records else None

    def clock_in(self, user_id: int, project_id: int, coordinates: Coordinates) -> AttendanceRecord:
        user_id = int(user_id)
        self._validate_coordinates(coordinates)
        if self._projects.get_by_id(int(project_id)) is None:
            raise ValidationError("Please select a valid project")

        with self._locks.hold(user_id):
            if self.get_active(user_id) is not None:
                raise AlreadyClockedIn()

            record = AttendanceRecord(
                id=self._new_record_id(user_id),
                user_id=user_id,
                project_id=int(project_id),
                in_time=self._clock(),
                in_coordinates=coordinates,
            )
            self._attendance.create(record)

        logger.info("user %s clocked in on project %s (record %s)", user_id, project_id, record.id)
        return record

    def clock_out(self, record_id: str, user_id: int, coordinates: Coordinates) -> AttendanceRecord:
        user_id = int(user_id)
        self._validate_coordinates(coordinates)

        with self._locks.hold(user_id):
            current = self._attendance.get_by_id(record_id) if record_id else None
            if current is None or current.user_id != user_id or not current.is_open:
                raise RecordNotFound()

            out_time = max(self._clock(), current.in_time)
            closed = self._attendance.close(
                record_id=record_id,
                user_id=user_id,
                out_time=out_time,
                out_coordinates=coordinates,
            )
            if closed is None:
                raise RecordNotFound()

        logger.info("user %s clocked out (record %s)", user_id, record_id)
        return closed

    def list_all(self) -> list[AttendanceRow]:
        """Every record joined with staff and project names, newest first.

        Returns a new list on each call; records are immutable, so later
        mutations never show up in a list already handed out.
        """
        staff_names = {u.id: u.name for u in self._users.list_all()}
        project_names = {p.id: p.name for p in self._projects.list_all()}

        rows = [
            AttendanceRow(
                record=r,
                staff_name=staff_names.get(r.user_id, UNKNOWN_STAFF_NAME),
                project_name=project_names.get(r.project_id, UNASSIGNED_PROJECT_NAME),
            )
            for r in self._attendance.list_all()
        ]
        rows.sort(key=lambda row: row.record.in_time, reverse=True)
        return rows

    def list_for_user(self, user_id: int, *, limit: int) -> Sequence[AttendanceRecord]:
        return list(self._attendance.list_for_user(int(user_id), int(limit)))

    @staticmethod
    def _new_record_id(user_id: int) -> str:
        return f"{RECORD_ID_PREFIX}_{user_id}_{uuid.uuid4().hex}"

    @staticmethod
    def _validate_coordinates(coordinates: Coordinates) -> None:
        if coordinates is None:
            raise ValidationError("Location coordinates are required")
        require_range(coordinates.latitude, "latitude", -90.0, 90.0)
        require_range(coordinates.longitude, "longitude", -180.0, 180.0)
