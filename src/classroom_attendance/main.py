from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from .config import get_settings_module
from .container import Container, build_container
from .core.constants import DEFAULT_SESSION_SWEEP_MINUTES, DEFAULT_SESSION_TTL_HOURS
from .database.bootstrap import apply_schema, ensure_demo_data, list_tables
from .logging_setup import configure_logging
from .maintenance import start_session_sweeper
from .attendance.controller import register as register_attendance
from .class_sessions.controller import register as register_sessions
from .classes.controller import register as register_classes
from .dashboard.controller import register as register_dashboard
from .reports.controller import register as register_reports
from .users.controller import register as register_users

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parents[2] / "database" / "schema.sql"


def create_app(container: Optional[Container] = None) -> Flask:
    """App factory. Pass ``container`` to run on prebuilt repositories (no DB bootstrap)."""

    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    db_config = getattr(settings, "DB_CONFIG")

    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"), getattr(settings, "LOG_FILE", None))
    logger.info(
        "settings=%s db=%s@%s:%s/%s",
        settings_module,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    if container is None:
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=SCHEMA_PATH)
            logger.info("Schema ready (tables=%d)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            ensure_demo_data(db_config)
            logger.info("Demo data ready")

        container = build_container(
            db_config=db_config,
            session_ttl_hours=int(getattr(settings, "SESSION_TTL_HOURS", DEFAULT_SESSION_TTL_HOURS)),
        )

    app.extensions["classroom_attendance"] = container

    register_users(app, container)
    register_classes(app, container)
    register_sessions(app, container)
    register_attendance(app, container)
    register_reports(app, container)
    register_dashboard(app, container)

    if bool(getattr(settings, "ENABLE_SCHEDULER", False)):
        minutes = int(getattr(settings, "SESSION_SWEEP_MINUTES", DEFAULT_SESSION_SWEEP_MINUTES))
        app.extensions["classroom_attendance_scheduler"] = start_session_sweeper(container.session_store, minutes=minutes)

    return app
