from __future__ import annotations

import importlib
import logging
from datetime import timedelta
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .database.bootstrap import apply_schema, apply_seed_sql, ensure_demo_admin, list_tables

from .container import Container, build_container
from .attendance.controller import register as register_attendance
from .employees.controller import register as register_employees
from .permissions.controller import register as register_permissions
from .reference.controller import register as register_reference
from .reports.controller import register as register_reports
from .users.controller import register as register_users

logger = logging.getLogger(__name__)

REPO_ROOT = Path(__file__).resolve().parents[3]


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
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
            apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")
            logger.info("Schema ready (tables=%d)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            apply_seed_sql(db_config, seed_path=REPO_ROOT / "database" / "seed.sql")
            ensure_demo_admin(db_config)

        container = build_container(
            db_config=db_config,
            page_size=int(getattr(settings, "DEFAULT_PAGE_SIZE", 10)),
            session_days=int(getattr(settings, "SESSION_LIFETIME_DAYS", 7)),
            reset_ttl_minutes=int(getattr(settings, "PASSWORD_RESET_TTL_MINUTES", 30)),
        )

    app.permanent_session_lifetime = timedelta(days=container.session_days)

    register_users(app, container)
    register_permissions(app, container)
    register_employees(app, container)
    register_reference(app, container)
    register_attendance(app, container)
    register_reports(app, container)

    return app
