from __future__ import annotations

from flask import Flask

from ..common.http import bearer_token, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/projects", methods=["GET"], endpoint="list_projects")
    def list_projects():
        projects = container.gateway.list_projects(bearer_token())
        return ok([p.to_dict() for p in projects])
