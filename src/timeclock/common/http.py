from __future__ import annotations

import logging
from typing import Any, Optional

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from ..core.exceptions import (
    AccessDenied,
    AlreadyClockedIn,
    DomainError,
    InvalidCredentials,
    InvariantViolation,
    NotAuthenticated,
    RecordNotFound,
    Unavailable,
    ValidationError,
)

logger = logging.getLogger(__name__)

STATUS_BY_KIND = {
    InvalidCredentials.kind: 401,
    NotAuthenticated.kind: 401,
    AccessDenied.kind: 403,
    RecordNotFound.kind: 404,
    AlreadyClockedIn.kind: 409,
    ValidationError.kind: 400,
    InvariantViolation.kind: 500,
    Unavailable.kind: 503,
}

# Kinds whose message is fixed so callers cannot learn which check failed.
GENERIC_MESSAGES = {
    InvalidCredentials.kind: "Invalid phone number or PIN",
    NotAuthenticated.kind: "Authentication required",
    AccessDenied.kind: "You do not have access to this resource",
    InvariantViolation.kind: "Internal error",
    Unavailable.kind: "Service temporarily unavailable, please retry",
}


def ok(data: Any = None, status: int = 200):
    return jsonify({"success": True, "data": data}), status


def fail(kind: str, message: str, status: int):
    return jsonify({"success": False, "kind": kind, "message": message}), status


def bearer_token() -> Optional[str]:
    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        status = STATUS_BY_KIND.get(e.kind, 400)
        if status >= 500:
            logger.error("%s on %s %s: %s", e.kind, request.method, request.path, e)
        return fail(e.kind, GENERIC_MESSAGES.get(e.kind, str(e)), status)

    @app.errorhandler(HTTPException)
    def handle_http_error(e: HTTPException):
        return fail("HttpError", e.description or e.name, e.code or 500)

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        logger.exception("unhandled error on %s %s", request.method, request.path)
        return fail("InternalError", "Internal error", 500)
