from __future__ import annotations

from flask import Flask

from ..common.http import bearer_token, json_body, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/auth/login", methods=["POST"], endpoint="login")
    def login():
        data = json_body()
        phone = data.get("phone")
        pin = data.get("pin")

        result = container.gateway.login(
            "" if phone is None else str(phone),
            "" if pin is None else str(pin),
        )
        return ok(result.to_dict())

    @app.route("/api/auth/me", methods=["GET"], endpoint="me")
    def me():
        identity = container.gateway.get_self(bearer_token())
        return ok(identity.to_dict())
