from __future__ import annotations

import importlib
import logging

from dotenv import load_dotenv
from flask import Flask, jsonify

from config import get_settings_module

from .core.constants import DEFAULT_LOGIN_EMAIL_DOMAIN, DEFAULT_TEAM_LEAD_LOCK_TIMEOUT
from .database.bootstrap import apply_schema, apply_seed_sql, ensure_demo_users, list_tables

from .container import build_container
from .attendance.controller import register as register_attendance
from .daily_logs.controller import register as register_daily_logs
from .employees.controller import register as register_employees
from .interns.controller import register as register_interns
from .projects.controller import register as register_projects
from .requests.controller import register as register_requests
from .tasks.controller import register as register_tasks
from .users.controller import register as register_users

logger = logging.getLogger(__name__)


def create_app() -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logger.info(
        "settings=%s db=%s@%s:%s/%s",
        settings_module,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(db_config)
        logger.info("Schema ready (tables=%d)", len(list_tables(db_config)))
    if bool(getattr(settings, "AUTO_SEED_DB", False)):
        apply_seed_sql(db_config)
        ensure_demo_users(db_config)
        logger.info("Demo seed ready")

    container = build_container(
        db_config=db_config,
        late_cutoff=getattr(settings, "LATE_CUTOFF", "09:30"),
        login_email_domain=getattr(settings, "LOGIN_EMAIL_DOMAIN", DEFAULT_LOGIN_EMAIL_DOMAIN),
        lock_timeout=int(getattr(settings, "TEAM_LEAD_LOCK_TIMEOUT", DEFAULT_TEAM_LEAD_LOCK_TIMEOUT)),
    )

    @app.route("/api/health", endpoint="health")
    def health():
        return jsonify({"status": "ok"})

    register_users(app, container)
    register_employees(app, container)
    register_interns(app, container)
    register_projects(app, container)
    register_attendance(app, container)
    register_requests(app, container)
    register_tasks(app, container)
    register_daily_logs(app, container)

    return app
