from __future__ import annotations

from flask import Flask, request

from ..common.http import bearer_token, json_body, ok
from ..common.validators import require_float, require_int, require_mapping, require_non_empty
from ..container import Container
from ..core.constants import DEFAULT_HISTORY_LIMIT
from .model import Coordinates


def _parse_coordinates(data: dict) -> Coordinates:
    raw = require_mapping(data.get("coordinates"), "coordinates")
    return Coordinates(
        latitude=require_float(raw.get("latitude"), "latitude"),
        longitude=require_float(raw.get("longitude"), "longitude"),
    )


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance/active", methods=["GET"], endpoint="active_record")
    def active_record():
        record = container.gateway.get_active_record(bearer_token())
        return ok(record.to_dict() if record else None)

    @app.route("/api/attendance/history", methods=["GET"], endpoint="history")
    def history():
        token = bearer_token()
        container.gateway.get_self(token)
        limit = require_int(request.args.get("limit", DEFAULT_HISTORY_LIMIT), "limit")
        records = container.gateway.get_history(token, limit)
        return ok([r.to_dict() for r in records])

    @app.route("/api/attendance/clock-in", methods=["POST"], endpoint="clock_in")
    def clock_in():
        token = bearer_token()
        # Reject bad tokens before looking at the payload.
        container.gateway.get_self(token)
        data = json_body()
        project_id = require_int(data.get("projectId"), "projectId")
        coordinates = _parse_coordinates(data)

        record = container.gateway.clock_in(token, project_id, coordinates)
        return ok(record.to_dict(), 201)

    @app.route("/api/attendance/clock-out", methods=["POST"], endpoint="clock_out")
    def clock_out():
        token = bearer_token()
        container.gateway.get_self(token)
        data = json_body()
        record_id = require_non_empty(data.get("recordId"), "recordId")
        coordinates = _parse_coordinates(data)

        record = container.gateway.clock_out(token, record_id, coordinates)
        return ok(record.to_dict())

    @app.route("/api/attendance", methods=["GET"], endpoint="list_attendance")
    def list_attendance():
        rows = container.gateway.list_attendance(bearer_token())
        return ok([r.to_dict() for r in rows])
