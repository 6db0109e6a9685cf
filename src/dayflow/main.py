from __future__ import annotations

import importlib
import logging
from typing import Any, Mapping, Optional

from dotenv import load_dotenv
from flask import Flask

from .attendance.controller import register as register_attendance
from .common.http import register_error_handlers
from .config import get_settings_module
from .container import build_container
from .database.bootstrap import apply_schema, ensure_demo_users, list_tables
from .leave.controller import register as register_leave
from .payroll.controller import register as register_payroll
from .users.controller import register as register_users

logger = logging.getLogger(__name__)

SETTING_NAMES = (
    "SECRET_KEY",
    "DATABASE_PATH",
    "DEBUG",
    "TESTING",
    "LOG_LEVEL",
    "AUTO_INIT_DB",
    "AUTO_SEED_DB",
    "LEAVE_REJECTION_POLICY",
    "LEAVE_ALLOW_REDECISION",
    "REMARK_DENYLIST",
    "REMARK_WORD_BOUNDARY",
)


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    logging.getLogger("dayflow").setLevel(getattr(logging, str(level).upper(), logging.INFO))


def create_app(overrides: Optional[Mapping[str, Any]] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    for name in SETTING_NAMES:
        if hasattr(settings, name):
            app.config[name] = getattr(settings, name)
    app.config.update(overrides or {})

    app.secret_key = app.config["SECRET_KEY"]
    app.config["DEBUG"] = bool(app.config.get("DEBUG", False))
    _configure_logging(app.config.get("LOG_LEVEL", "INFO"))

    db_config = {"path": app.config["DATABASE_PATH"]}
    logger.info("settings=%s db=%s", settings_module, db_config["path"])

    if app.config.get("AUTO_INIT_DB"):
        apply_schema(db_config)
        logger.debug("schema ready (tables=%d)", len(list_tables(db_config)))
    if app.config.get("AUTO_SEED_DB"):
        ensure_demo_users(db_config)

    container = build_container(
        db_config=db_config,
        rejection_policy=app.config.get("LEAVE_REJECTION_POLICY", "absent"),
        allow_redecision=bool(app.config.get("LEAVE_ALLOW_REDECISION", True)),
        remark_denylist=app.config.get("REMARK_DENYLIST"),
        remark_word_boundary=bool(app.config.get("REMARK_WORD_BOUNDARY", False)),
    )
    app.extensions["dayflow"] = container

    register_error_handlers(app)
    register_users(app, container)
    register_leave(app, container)
    register_attendance(app, container)
    register_payroll(app, container)

    return app
