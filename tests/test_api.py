from __future__ import annotations

import types

import mysql.connector
import pytest

from timeclock.database.connection import DatabaseConnection
from timeclock.main import create_app

SITE = {"latitude": 12.9716, "longitude": 77.5946}


def _login(client, phone, pin):
    resp = client.post("/api/auth/login", json={"phone": phone, "pin": pin})
    assert resp.status_code == 200
    return resp.get_json()["data"]["token"]


def _auth(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def staff(client):
    return _auth(_login(client, "1112223333", "1234"))


@pytest.fixture
def admin(client):
    return _auth(_login(client, "9998887777", "0000"))


def test_health(client):
    resp = client.get("/health")

    assert resp.status_code == 200
    assert resp.get_json()["data"]["status"] == "ok"


def test_login_payload(client):
    resp = client.post("/api/auth/login", json={"phone": "1112223333", "pin": "1234"})
    data = resp.get_json()["data"]

    assert data["user"] == {"id": 1, "name": "John Doe", "phone": "1112223333", "role": "STAFF"}
    assert data["token"]
    assert data["expiresAt"] == "2026-02-01T16:00:00Z"


@pytest.mark.parametrize(
    "body",
    [
        {"phone": "1112223333", "pin": "9999"},
        {"phone": "0000000000", "pin": "1234"},
        {"phone": "", "pin": ""},
    ],
)
def test_login_failure_is_generic(client, body):
    resp = client.post("/api/auth/login", json=body)

    assert resp.status_code == 401
    assert resp.get_json() == {"success": False, "kind": "InvalidCredentials", "message": "Invalid phone number or PIN"}


def test_login_requires_json_object(client):
    resp = client.post("/api/auth/login", data="nope", content_type="text/plain")

    assert resp.status_code == 400
    assert resp.get_json()["kind"] == "ValidationError"


def test_me(client, staff):
    resp = client.get("/api/auth/me", headers=staff)

    assert resp.get_json()["data"]["name"] == "John Doe"


@pytest.mark.parametrize("headers", [{}, {"Authorization": "Bearer junk"}, {"Authorization": "Basic abc"}])
def test_missing_or_bad_token(client, headers):
    resp = client.get("/api/attendance/active", headers=headers)

    assert resp.status_code == 401
    assert resp.get_json()["kind"] == "NotAuthenticated"


def test_bad_token_is_checked_before_body(client):
    resp = client.post("/api/attendance/clock-in", json={}, headers={"Authorization": "Bearer junk"})

    assert resp.status_code == 401


def test_projects(client, staff):
    resp = client.get("/api/projects", headers=staff)

    assert [p["id"] for p in resp.get_json()["data"]] == [101, 102, 103]


def test_clock_in_and_out_flow(client, staff, clock):
    assert client.get("/api/attendance/active", headers=staff).get_json()["data"] is None

    resp = client.post("/api/attendance/clock-in", json={"projectId": 101, "coordinates": SITE}, headers=staff)
    assert resp.status_code == 201
    record = resp.get_json()["data"]
    assert record["outTime"] is None
    assert record["inTime"] == "2026-02-01T08:00:00Z"
    assert record["inCoordinates"] == SITE

    dup = client.post("/api/attendance/clock-in", json={"projectId": 101, "coordinates": SITE}, headers=staff)
    assert dup.status_code == 409
    assert dup.get_json()["kind"] == "AlreadyClockedIn"

    active = client.get("/api/attendance/active", headers=staff).get_json()["data"]
    assert active["id"] == record["id"]

    clock.advance(hours=2)
    out = client.post("/api/attendance/clock-out", json={"recordId": record["id"], "coordinates": SITE}, headers=staff)
    assert out.status_code == 200
    assert out.get_json()["data"]["outTime"] == "2026-02-01T10:00:00Z"

    again = client.post("/api/attendance/clock-out", json={"recordId": record["id"], "coordinates": SITE}, headers=staff)
    assert again.status_code == 404
    assert again.get_json()["kind"] == "RecordNotFound"

    history = client.get("/api/attendance/history?limit=5", headers=staff).get_json()["data"]
    assert [h["id"] for h in history] == [record["id"]]


@pytest.mark.parametrize(
    "body",
    [
        {"projectId": "abc", "coordinates": SITE},
        {"projectId": 101},
        {"projectId": 101, "coordinates": {"latitude": 95, "longitude": 0}},
        {"projectId": 999, "coordinates": SITE},
        {"projectId": 101.9, "coordinates": SITE},
    ],
)
def test_clock_in_validation(client, staff, body):
    resp = client.post("/api/attendance/clock-in", json=body, headers=staff)

    assert resp.status_code == 400
    assert resp.get_json()["kind"] == "ValidationError"


def test_admin_listing(client, staff, admin):
    client.post("/api/attendance/clock-in", json={"projectId": 102, "coordinates": SITE}, headers=staff)

    denied = client.get("/api/attendance", headers=staff)
    assert denied.status_code == 403
    assert denied.get_json()["kind"] == "AccessDenied"

    rows = client.get("/api/attendance", headers=admin).get_json()["data"]
    assert len(rows) == 1
    assert rows[0]["staffName"] == "John Doe"
    assert rows[0]["projectName"] == "Suburb Shopping Mall Setup"


def test_unknown_route(client):
    resp = client.get("/api/nope")

    assert resp.status_code == 404
    assert resp.get_json()["kind"] == "HttpError"


def test_numeric_json_credentials_are_accepted(client):
    resp = client.post("/api/auth/login", json={"phone": 1112223333, "pin": 1234})

    assert resp.status_code == 200
    assert resp.get_json()["data"]["user"]["id"] == 1


def test_missing_pin_is_invalid_credentials(client):
    resp = client.post("/api/auth/login", json={"phone": "1112223333"})

    assert resp.status_code == 401
    assert resp.get_json()["kind"] == "InvalidCredentials"


def test_database_down_during_startup_is_unavailable(monkeypatch, clock):
    def refuse(self, *, with_database=True):
        raise mysql.connector.InterfaceError(msg="Can't connect to MySQL server")

    monkeypatch.setattr(DatabaseConnection, "_instance", None)
    monkeypatch.setattr(DatabaseConnection, "connect", refuse)
    settings = types.SimpleNamespace(
        SECRET_KEY="test-secret",
        TOKEN_SECRET="test-token-secret-0123456789abcdef0123456789",
        PIN_HASH_METHOD="pbkdf2:sha256:1000",
        STORAGE_BACKEND="mysql",
        DB_CONFIG={"host": "localhost", "database": "timeclock_test"},
        AUTO_INIT_DB=True,
        AUTO_SEED_DB=True,
        LOG_LEVEL="WARNING",
    )
    app = create_app(settings, clock=clock)
    try:
        resp = app.test_client().post("/api/auth/login", json={"phone": "1112223333", "pin": "1234"})
    finally:
        app.extensions["timeclock"].auth_service.shutdown()

    assert resp.status_code == 503
    assert resp.get_json()["kind"] == "Unavailable"
    assert not app.extensions["timeclock"].initializer.ready
