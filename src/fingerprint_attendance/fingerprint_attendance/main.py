from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .common.web import register_error_handlers
from .container import Container, build_container
from .contracts.controller import register as register_contracts
from .database.bootstrap import apply_schema, apply_seed_sql, ensure_demo_admin, list_tables
from .departments.controller import register as register_departments
from .staff.controller import register as register_staff
from .users.controller import register as register_users

logger = logging.getLogger(__name__)

_DATABASE_DIR = Path(__file__).resolve().parents[3] / "database"


def create_app(container: Optional[Container] = None) -> Flask:
    """Application factory.

    Passing a ready ``container`` skips every database side effect, which is
    how the API tests run against in-memory repositories.
    """

    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=_DATABASE_DIR / "schema.sql")
            logger.info("Schema ready (tables=%s)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            apply_seed_sql(db_config, seed_path=_DATABASE_DIR / "seed.sql")
            ensure_demo_admin(
                db_config,
                email=getattr(settings, "DEMO_ADMIN_EMAIL"),
                password=getattr(settings, "DEMO_ADMIN_PASSWORD"),
            )

        container = build_container(
            secret_key=app.secret_key,
            db_config=db_config,
            short_expiry_seconds=int(getattr(settings, "TOKEN_SHORT_EXPIRY_SECONDS", 900)),
            long_expiry_seconds=int(getattr(settings, "TOKEN_LONG_EXPIRY_SECONDS", 604800)),
        )

    app.extensions["container"] = container
    register_error_handlers(app)

    register_users(app, container)
    register_departments(app, container)
    register_staff(app, container)
    register_contracts(app, container)
    register_attendance(app, container)

    return app
