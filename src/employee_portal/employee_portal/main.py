from __future__ import annotations

import importlib
import logging
from datetime import time
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, request

from config import get_settings_module

from .common.datetime_utils import parse_clock
from .common.http import register_error_handlers
from .container import Container, build_container
from .core.constants import DEFAULT_LATE_GRACE_MINUTES, DEFAULT_WORKDAY_START
from .database.bootstrap import apply_schema, apply_seed_sql, ensure_demo_users, list_tables
from .database.connection import DBConfig
from .attendance.controller import register as register_attendance
from .auth.controller import register as register_auth
from .employees.controller import register as register_employees
from .leaves.controller import register as register_leaves
from .login_logs.controller import register as register_login_logs
from .tasks.controller import register as register_tasks

logger = logging.getLogger(__name__)

DATABASE_DIR = Path(__file__).resolve().parents[3] / "database"


def _configure_logging(level_name: str) -> None:
    level = getattr(logging, str(level_name).upper(), logging.INFO)
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s [%(name)s] %(message)s")
    logging.getLogger().setLevel(level)


def _workday_start(settings) -> time:
    value = getattr(settings, "WORKDAY_START", None)
    return parse_clock(value, "WORKDAY_START") if value else DEFAULT_WORKDAY_START


def _install_cors(app: Flask, origins) -> None:
    allowed = [o.strip() for o in (origins or []) if o and o.strip()]
    if not allowed:
        return

    @app.after_request
    def add_cors_headers(response):
        origin = request.headers.get("Origin")
        if "*" in allowed:
            response.headers["Access-Control-Allow-Origin"] = "*"
        elif origin in allowed:
            response.headers["Access-Control-Allow-Origin"] = origin
            response.headers["Vary"] = "Origin"
        else:
            return response
        response.headers["Access-Control-Allow-Methods"] = "GET, POST, PUT, DELETE, OPTIONS"
        response.headers["Access-Control-Allow-Headers"] = "Content-Type"
        return response


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))

    _configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    logger.info("settings=%s db=%s", settings_module, DBConfig.from_dict(db_config).describe())

    if container is None:
        if getattr(settings, "AUTO_INIT_DB", False):
            apply_schema(db_config, schema_path=DATABASE_DIR / "schema.sql")
            logger.info("schema ready (tables=%s)", len(list_tables(db_config)))
        if getattr(settings, "AUTO_SEED_DB", False):
            apply_seed_sql(db_config, seed_path=DATABASE_DIR / "seed.sql")
            ensure_demo_users(db_config)
            logger.info("demo seed ready")

        container = build_container(
            db_config=db_config,
            workday_start=_workday_start(settings),
            grace_minutes=int(getattr(settings, "LATE_GRACE_MINUTES", DEFAULT_LATE_GRACE_MINUTES)),
        )

    _install_cors(app, getattr(settings, "CORS_ORIGINS", []))
    register_error_handlers(app)

    register_employees(app, container)
    register_tasks(app, container)
    register_attendance(app, container)
    register_leaves(app, container)
    register_login_logs(app, container)
    register_auth(app, container)

    return app
