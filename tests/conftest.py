from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from timeclock.attendance.memory_attendance_repository import InMemoryAttendanceRepository
from timeclock.attendance.service import AttendanceLedger
from timeclock.config import testing as testing_settings
from timeclock.container import build_container
from timeclock.core.enums import Role
from timeclock.main import create_app
from timeclock.projects.memory_project_repository import InMemoryProjectRepository
from timeclock.users.memory_user_repository import InMemoryUserRepository
from timeclock.users.service import CredentialStore

TEST_HASH_METHOD = "pbkdf2:sha256:1000"

STAFF_PHONE, STAFF_PIN = "1112223333", "1234"
OTHER_STAFF_PHONE, OTHER_STAFF_PIN = "4445556666", "5678"
ADMIN_PHONE, ADMIN_PIN = "9998887777", "0000"


class FixedClock:
    """Callable clock that only moves when told to."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 2, 1, 8, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def clock(fixed_now) -> FixedClock:
    return FixedClock(fixed_now)


@pytest.fixture
def users_repo() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def projects_repo() -> InMemoryProjectRepository:
    repo = InMemoryProjectRepository()
    repo.upsert(project_id=101, name="Downtown Tower Installation")
    repo.upsert(project_id=102, name="Suburb Shopping Mall Setup")
    return repo


@pytest.fixture
def credential_store(users_repo) -> CredentialStore:
    store = CredentialStore(users_repo, hash_method=TEST_HASH_METHOD)
    store.provision(user_id=1, name="John Doe", phone=STAFF_PHONE, role=Role.STAFF, pin=STAFF_PIN)
    store.provision(user_id=2, name="Jane Smith", phone=OTHER_STAFF_PHONE, role=Role.STAFF, pin=OTHER_STAFF_PIN)
    store.provision(user_id=3, name="Admin User", phone=ADMIN_PHONE, role=Role.ADMIN, pin=ADMIN_PIN)
    return store


@pytest.fixture
def attendance_repo() -> InMemoryAttendanceRepository:
    return InMemoryAttendanceRepository()


@pytest.fixture
def ledger(attendance_repo, users_repo, projects_repo, credential_store, clock) -> AttendanceLedger:
    return AttendanceLedger(attendance_repo, users_repo, projects_repo, clock=clock)


@pytest.fixture
def container(clock):
    c = build_container(testing_settings, clock=clock)
    c.ensure_initialized()
    yield c
    c.auth_service.shutdown()


@pytest.fixture
def gateway(container):
    return container.gateway


@pytest.fixture
def app(clock):
    app = create_app(testing_settings, clock=clock)
    yield app
    app.extensions["timeclock"].auth_service.shutdown()


@pytest.fixture
def client(app):
    return app.test_client()
