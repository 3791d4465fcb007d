from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Any, Callable, Optional

from .attendance.memory_attendance_repository import InMemoryAttendanceRepository
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceLedger
from .auth.gateway import SessionGateway
from .auth.token_service import TokenService
from .common.datetime_utils import Clock
from .core.constants import PIN_HASH_METHOD, TOKEN_LIFETIME_SECONDS
from .database.bootstrap import apply_schema, list_tables
from .database.connection import DatabaseConnection, DBConfig
from .database.seed import apply_seed
from .projects.memory_project_repository import InMemoryProjectRepository
from .projects.mysql_project_repository import MySQLProjectRepository
from .projects.repository import ProjectRepository
from .users.memory_user_repository import InMemoryUserRepository
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, CredentialStore

logger = logging.getLogger(__name__)


class OnceInitializer:
    """Run a setup callable exactly once.

    Concurrent first callers block on the same lock and observe the finished
    state; a failed attempt leaves the initializer unset so a later call retries.
    """

    def __init__(self, setup: Callable[[], None]):
        self._setup = setup
        self._lock = threading.Lock()
        self._ready = False

    @property
    def ready(self) -> bool:
        return self._ready

    def ensure(self) -> None:
        if self._ready:
            return
        with self._lock:
            if self._ready:
                return
            self._setup()
            self._ready = True


@dataclass(frozen=True)
class Container:
    users_repo: UserRepository
    projects_repo: ProjectRepository
    attendance_repo: AttendanceRepository

    credential_store: CredentialStore
    auth_service: AuthService
    token_service: TokenService
    ledger: AttendanceLedger
    gateway: SessionGateway

    initializer: OnceInitializer

    def ensure_initialized(self) -> None:
        self.initializer.ensure()


def _setting(settings: Any, name: str, default: Any = None) -> Any:
    return getattr(settings, name, default)


def _build_repositories(settings: Any):
    backend = str(_setting(settings, "STORAGE_BACKEND", "memory")).lower()
    if backend == "memory":
        return InMemoryUserRepository(), InMemoryProjectRepository(), InMemoryAttendanceRepository(), None

    if backend == "mysql":
        conn = DatabaseConnection.get_instance(DBConfig.from_dict(dict(_setting(settings, "DB_CONFIG", {}))))
        return MySQLUserRepository(conn), MySQLProjectRepository(conn), MySQLAttendanceRepository(conn), conn

    raise ValueError(f"Unknown STORAGE_BACKEND: {backend!r}")


def build_container(settings: Any, *, clock: Optional[Clock] = None) -> Container:
    users_repo, projects_repo, attendance_repo, conn = _build_repositories(settings)

    credential_store = CredentialStore(users_repo, hash_method=_setting(settings, "PIN_HASH_METHOD", PIN_HASH_METHOD))
    auth_service = AuthService(
        credential_store,
        verify_timeout=_setting(settings, "PIN_VERIFY_TIMEOUT_SECONDS"),
    )
    token_service = TokenService(
        _setting(settings, "TOKEN_SECRET", ""),
        lifetime_seconds=int(_setting(settings, "TOKEN_LIFETIME_SECONDS", TOKEN_LIFETIME_SECONDS)),
        clock=clock,
    )
    ledger = AttendanceLedger(attendance_repo, users_repo, projects_repo, clock=clock)
    gateway = SessionGateway(auth_service, token_service, ledger, projects_repo)

    def setup() -> None:
        if conn is None:
            apply_seed(credential_store, projects_repo)
            return

        if bool(_setting(settings, "AUTO_INIT_DB", False)):
            apply_schema(conn)
            logger.info("schema ready (tables=%d)", len(list_tables(conn)))
        if bool(_setting(settings, "AUTO_SEED_DB", False)):
            apply_seed(credential_store, projects_repo)

    return Container(
        users_repo=users_repo,
        projects_repo=projects_repo,
        attendance_repo=attendance_repo,
        credential_store=credential_store,
        auth_service=auth_service,
        token_service=token_service,
        ledger=ledger,
        gateway=gateway,
        initializer=OnceInitializer(setup),
    )
