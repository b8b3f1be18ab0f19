from __future__ import annotations

import importlib
from typing import Optional

from dotenv import load_dotenv
from flask import Flask
from loguru import logger

from .config import get_settings_module
from .container import build_container, build_store
from .core.constants import DEFAULT_LOAN_PERIOD_DAYS
from .database.bootstrap import apply_schema, list_tables
from .logging_setup import configure_logging
from .web.errors import register_error_handlers

from .accounts.controller import register as register_accounts
from .attendance.controller import register as register_attendance
from .catalog.controller import register as register_catalog
from .library.controller import register as register_library
from .students.controller import register as register_students


def create_app(settings_module: Optional[str] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    backend = getattr(settings, "STORE_BACKEND", "mysql")
    db_config = getattr(settings, "DB_CONFIG", None)
    store, conn = build_store(backend=backend, db_config=db_config)
    logger.info("record-suite starting (settings={}, store={})", settings_module, backend)

    if conn is not None and bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(conn)
        logger.debug("Schema ready (tables={})", len(list_tables(conn)))

    container = build_container(
        store=store,
        conn=conn,
        loan_period_days=int(getattr(settings, "LOAN_PERIOD_DAYS", DEFAULT_LOAN_PERIOD_DAYS)),
    )

    if bool(getattr(settings, "AUTO_SEED_DB", False)):
        container.employee_service.ensure_admin(
            username=getattr(settings, "ADMIN_USERNAME", "admin"),
            password=getattr(settings, "ADMIN_PASSWORD", ""),
        )
        logger.info("Demo admin account ready")

    register_error_handlers(app)
    register_accounts(app, container)
    register_catalog(app, container)
    register_library(app, container)
    register_students(app, container)
    register_attendance(app, container)

    return app
