from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .common.http import register_error_handlers
from .container import build_container
from .core.constants import AUDIT_LOG_LIMIT
from .core.logging_config import configure_logging
from .database.bootstrap import apply_schema, list_tables
from .employees.controller import register as register_employees
from .holidays.controller import register as register_holidays
from .payroll.controller import register as register_payroll
from .timesheets.controller import register as register_timesheets

logger = logging.getLogger(__name__)


def create_app(settings_module: Optional[str] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    configure_logging(level=getattr(settings, "LOG_LEVEL", "INFO"))

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["PUBLIC_BASE_URL"] = getattr(settings, "PUBLIC_BASE_URL", "")

    storage_backend = getattr(settings, "STORAGE_BACKEND", "mysql")
    db_config = getattr(settings, "DB_CONFIG", {})
    logger.info("Starting payroll hub: settings=%s backend=%s", settings_module, storage_backend)

    if storage_backend == "mysql" and bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(db_config)
        logger.info("Schema ready (tables=%d)", len(list_tables(db_config)))

    container = build_container(
        storage_backend=storage_backend,
        db_config=db_config,
        audit_log_limit=int(getattr(settings, "AUDIT_LOG_LIMIT", AUDIT_LOG_LIMIT)),
    )
    app.extensions["payroll_hub"] = container

    register_error_handlers(app)
    register_holidays(app, container)
    register_employees(app, container)
    register_timesheets(app, container)
    register_payroll(app, container)

    return app
