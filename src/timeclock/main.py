from __future__ import annotations

import atexit
import importlib
import logging
from typing import Any, Optional

from dotenv import load_dotenv
from flask import Flask

from .attendance.controller import register as register_attendance
from .common.datetime_utils import Clock
from .common.http import ok, register_error_handlers
from .config import get_settings_module
from .container import build_container
from .projects.controller import register as register_projects
from .users.controller import register as register_users

logger = logging.getLogger(__name__)


def _configure_logging(level: str) -> None:
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(format="%(asctime)s %(levelname)s [%(name)s] %(message)s")
    logging.getLogger("timeclock").setLevel(level.upper())


def create_app(settings: Optional[Any] = None, *, clock: Optional[Clock] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    if settings is None:
        settings_module = get_settings_module()
        settings = importlib.import_module(settings_module)
    else:
        settings_module = getattr(settings, "__name__", type(settings).__name__)

    _configure_logging(str(getattr(settings, "LOG_LEVEL", "INFO")))

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    container = build_container(settings, clock=clock)
    app.extensions["timeclock"] = container
    atexit.register(container.auth_service.shutdown)
    logger.info(
        "settings=%s backend=%s",
        settings_module,
        getattr(settings, "STORAGE_BACKEND", "memory"),
    )

    @app.before_request
    def _ensure_initialized():
        container.ensure_initialized()

    @app.route("/health", methods=["GET"], endpoint="health")
    def health():
        return ok({"status": "ok", "ready": container.initializer.ready})

    register_error_handlers(app)
    register_users(app, container)
    register_projects(app, container)
    register_attendance(app, container)

    return app
