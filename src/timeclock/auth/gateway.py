"""
Session Gateway - single entry point for every authenticated operation
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Sequence

from ..attendance.model import AttendanceRecord, AttendanceRow, Coordinates
from ..attendance.service import AttendanceLedger
from ..common.datetime_utils import to_iso
from ..core.constants import DEFAULT_HISTORY_LIMIT, MAX_HISTORY_LIMIT
from ..core.enums import Operation
from ..core.exceptions import AccessDenied, NotAuthenticated, TokenExpired, TokenInvalid, ValidationError
from ..projects.model import Project
from ..projects.repository import ProjectRepository
from ..users.model import SafeIdentity
from ..users.service import AuthService
from .policy import require_allowed
from .token_service import TokenService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoginResult:
    identity: SafeIdentity
    token: str
    expires_at: datetime

    def to_dict(self) -> dict:
        return {"user": self.identity.to_dict(), "token": self.token, "expiresAt": to_iso(self.expires_at)}


class SessionGateway:
    """Resolve bearer token -> identity, authorize by role, then delegate.

    The acting user id always comes from the verified token, never from
    request input, so a caller can only touch their own records.
    """

    def __init__(
        self,
        auth: AuthService,
        tokens: TokenService,
        ledger: AttendanceLedger,
        projects: ProjectRepository,
    ):
        self._auth = auth
        self._tokens = tokens
        self._ledger = ledger
        self._projects = projects

    def login(self, phone: str, pin: str) -> LoginResult:
        identity = self._auth.authenticate(phone, pin)
        token = self._tokens.issue(identity)
        return LoginResult(identity=identity, token=token, expires_at=self._tokens.expires_at(token))

    def get_self(self, token: Optional[str]) -> SafeIdentity:
        return self._resolve(token, Operation.GET_SELF)

    def get_active_record(self, token: Optional[str]) -> Optional[AttendanceRecord]:
        identity = self._resolve(token, Operation.GET_ACTIVE_RECORD)
        return self._ledger.get_active(identity.id)

    def get_history(self, token: Optional[str], limit: int = DEFAULT_HISTORY_LIMIT) -> Sequence[AttendanceRecord]:
        identity = self._resolve(token, Operation.GET_HISTORY)
        if limit < 1 or limit > MAX_HISTORY_LIMIT:
            raise ValidationError(f"limit must be between 1 and {MAX_HISTORY_LIMIT}")
        return self._ledger.list_for_user(identity.id, limit=limit)

    def clock_in(self, token: Optional[str], project_id: int, coordinates: Coordinates) -> AttendanceRecord:
        identity = self._resolve(token, Operation.CLOCK_IN)
        return self._ledger.clock_in(identity.id, project_id, coordinates)

    def clock_out(self, token: Optional[str], record_id: str, coordinates: Coordinates) -> AttendanceRecord:
        identity = self._resolve(token, Operation.CLOCK_OUT)
        return self._ledger.clock_out(record_id, identity.id, coordinates)

    def list_attendance(self, token: Optional[str]) -> list[AttendanceRow]:
        self._resolve(token, Operation.LIST_ATTENDANCE)
        return self._ledger.list_all()

    def list_projects(self, token: Optional[str]) -> Sequence[Project]:
        self._resolve(token, Operation.LIST_PROJECTS)
        return list(self._projects.list_all())

    def _resolve(self, token: Optional[str], operation: Operation) -> SafeIdentity:
        if not token:
            raise NotAuthenticated()
        try:
            identity = self._tokens.verify(token)
        except TokenExpired:
            logger.info("rejected %s: token expired", operation.value)
            raise NotAuthenticated()
        except TokenInvalid as e:
            logger.info("rejected %s: %s", operation.value, e)
            raise NotAuthenticated()

        try:
            require_allowed(operation, identity.role)
        except AccessDenied:
            logger.warning("user %s (%s) denied %s", identity.id, identity.role.value, operation.value)
            raise
        return identity
