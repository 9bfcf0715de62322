from __future__ import annotations

import importlib
import logging
import time
import uuid
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from flask import Flask, g, request

from config import get_settings_module

from .auth.controller import register as register_auth
from .checkins.controller import register as register_checkins
from .common.http import register_error_handlers
from .container import build_container
from .core.constants import DEFAULT_TOKEN_MINUTES, MAX_UPLOAD_BYTES
from .core.logging import configure_logging
from .database.bootstrap import apply_schema, apply_seed_sql, ensure_admin_user, list_tables
from .documents.controller import register as register_documents
from .employees.controller import register as register_employees
from .feedback.controller import register as register_feedback

logger = logging.getLogger(__name__)

_DATABASE_DIR = Path(__file__).resolve().parents[3] / "database"


def _register_request_logging(app: Flask) -> None:
    access_log = logging.getLogger("hr_backend.access")

    @app.before_request
    def _start_request():
        g.request_id = request.headers.get("X-Request-Id") or str(uuid.uuid4())
        g.request_started = time.perf_counter()

    @app.after_request
    def _log_request(response):
        request_id = getattr(g, "request_id", None)
        if request_id:
            response.headers["X-Request-Id"] = request_id
        started = getattr(g, "request_started", None)
        current_user = getattr(g, "current_user", None)
        access_log.info(
            "request completed",
            extra={
                "request_id": request_id,
                "user_id": getattr(current_user, "id", None),
                "path": request.path,
                "method": request.method,
                "status_code": response.status_code,
                "latency_ms": round((time.perf_counter() - started) * 1000, 2) if started else None,
            },
        )
        return response


def _bootstrap_database(settings: Any, db_config: dict) -> None:
    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        created = apply_schema(db_config, schema_path=_DATABASE_DIR / "schema.sql")
        logger.info("schema ready created=%s tables=%s", created, len(list_tables(db_config)))
    if bool(getattr(settings, "AUTO_SEED_DB", False)):
        apply_seed_sql(db_config, seed_path=_DATABASE_DIR / "seed.sql")
        ensure_admin_user(db_config)
        logger.info("seed data ready")


def create_app(settings_module: Optional[str] = None, container: Any = None) -> Flask:
    """Application factory.

    ``container`` lets callers (tests, scripts) inject prebuilt services; when
    omitted the MySQL-backed container is built from the settings module.
    """
    load_dotenv(override=False)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    app = Flask(__name__)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["MAX_CONTENT_LENGTH"] = int(getattr(settings, "MAX_UPLOAD_BYTES", MAX_UPLOAD_BYTES))

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info(
            "starting settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )
        _bootstrap_database(settings, db_config)
        container = build_container(
            db_config=db_config,
            jwt_secret=getattr(settings, "JWT_SECRET", app.secret_key),
            jwt_algorithm=getattr(settings, "JWT_ALGORITHM", "HS256"),
            jwt_expire_minutes=int(getattr(settings, "JWT_EXPIRE_MINUTES", DEFAULT_TOKEN_MINUTES)),
            upload_dir=getattr(settings, "UPLOAD_DIR", "uploads/documents"),
        )

    app.extensions["container"] = container

    register_error_handlers(app)
    _register_request_logging(app)

    register_auth(app, container)
    register_employees(app, container)
    register_checkins(app, container)
    register_documents(app, container)
    register_feedback(app, container)

    return app
