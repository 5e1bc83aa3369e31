from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from .attendance.controller import register as register_attendance
from .common.http import register_error_handlers
from .config import get_settings_module
from .container import build_container
from .logs.controller import register as register_logs
from .sessions.controller import register as register_sessions
from .storage.store import CollectionStore
from .users.controller import register as register_users

logger = logging.getLogger(__name__)


def create_app(settings_module: Optional[str] = None, *, store: Optional[CollectionStore] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["QR_TOKEN"] = getattr(settings, "QR_TOKEN")

    if app.config["DEBUG"]:
        logging.basicConfig(level=logging.DEBUG, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
        logger.info(
            "settings=%s storage=%s latency=%sms",
            settings_module,
            getattr(settings, "STORAGE_BACKEND", "memory"),
            getattr(settings, "STORE_LATENCY_MS", 0),
        )

    container = build_container(settings=settings, store=store)

    register_error_handlers(app)
    register_sessions(app, container)
    register_users(app, container)
    register_logs(app, container)
    register_attendance(app, container)

    return app
