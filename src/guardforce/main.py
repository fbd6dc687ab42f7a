from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from .attendance.controller import register as register_attendance
from .common.web import register_error_handlers
from .company.controller import register as register_company
from .container import Container, build_container
from .core.constants import DEFAULT_ATTENDANCE_POLL_SECONDS, DEFAULT_GST_RATE
from .database.bootstrap import apply_schema, ensure_admin_user, list_tables
from .guards.controller import register as register_guards
from .invoices.controller import register as register_invoices
from .payments.controller import register as register_payments
from .settings import get_settings_module
from .shifts.controller import register as register_shifts
from .sites.controller import register as register_sites
from .staffing_requests.controller import register as register_staffing_requests
from .users.controller import register as register_users
from .utility_charges.controller import register as register_utility_charges

logger = logging.getLogger(__name__)


def create_app(container: Optional[Container] = None, *, settings_module: Optional[str] = None) -> Flask:
    """Application factory.

    Note: passing a ready `container` skips every database step, which is how
    the HTTP tests run against in-memory repositories.
    """
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["GST_RATE"] = float(getattr(settings, "GST_RATE", DEFAULT_GST_RATE))
    app.config["ATTENDANCE_POLL_SECONDS"] = int(
        getattr(settings, "ATTENDANCE_POLL_SECONDS", DEFAULT_ATTENDANCE_POLL_SECONDS)
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
            apply_schema(db_config)
            logger.info("Schema ready (tables=%d)", len(list_tables(db_config)))

            admin_email = getattr(settings, "ADMIN_EMAIL", None)
            admin_password = getattr(settings, "ADMIN_PASSWORD", None)
            if admin_email and admin_password:
                ensure_admin_user(db_config, email=admin_email.strip().lower(), password=admin_password)

        container = build_container(
            db_config=db_config,
            gst_rate=app.config["GST_RATE"],
            invoice_fallback_path=getattr(settings, "INVOICE_FALLBACK_PATH", None),
        )

    register_error_handlers(app)
    register_users(app, container)
    register_sites(app, container)
    register_guards(app, container)
    register_shifts(app, container)
    register_attendance(app, container)
    register_invoices(app, container)
    register_staffing_requests(app, container)
    register_company(app, container)
    register_utility_charges(app, container)
    register_payments(app, container)

    return app
