from __future__ import annotations

import importlib
import logging
from decimal import Decimal
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .common.http import register_error_handlers
from .container import Container, build_container
from .attendance.controller import register as register_attendance
from .leaves.controller import register as register_leaves
from .payroll.controller import register as register_payroll
from .users.controller import register as register_users
from .core.constants import (
    DEFAULT_PAID_LEAVE_DAYS,
    DEFAULT_SICK_LEAVE_DAYS,
    DEFAULT_TOKEN_MAX_AGE_SECONDS,
    PROFESSIONAL_TAX,
    STANDARD_ALLOWANCE,
)

logger = logging.getLogger(__name__)


def create_app(container: Optional[Container] = None) -> Flask:
    """Application factory.

    The schema is not touched here; run ``scripts/init_db.py`` once per deployment.
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
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
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
        container = build_container(
            db_config=db_config,
            secret_key=app.secret_key,
            token_max_age_seconds=int(getattr(settings, "TOKEN_MAX_AGE_SECONDS", DEFAULT_TOKEN_MAX_AGE_SECONDS)),
            standard_allowance=Decimal(str(getattr(settings, "STANDARD_ALLOWANCE", STANDARD_ALLOWANCE))),
            professional_tax=Decimal(str(getattr(settings, "PROFESSIONAL_TAX", PROFESSIONAL_TAX))),
            paid_leave_days=int(getattr(settings, "DEFAULT_PAID_LEAVE_DAYS", DEFAULT_PAID_LEAVE_DAYS)),
            sick_leave_days=int(getattr(settings, "DEFAULT_SICK_LEAVE_DAYS", DEFAULT_SICK_LEAVE_DAYS)),
        )

    register_error_handlers(app)
    register_users(app, container)
    register_attendance(app, container)
    register_leaves(app, container)
    register_payroll(app, container)

    @app.route("/api/health", methods=["GET"], endpoint="health")
    def health():
        return {"status": "ok"}

    return app
