"""Create the database, apply database/schema.sql and the bootstrap admin.

Usage: APP_ENV=production python scripts/init_db.py
"""

from __future__ import annotations

import importlib
import logging

from dotenv import load_dotenv

from guardforce.database.bootstrap import apply_schema, ensure_admin_user, list_tables
from guardforce.settings import get_settings_module

logger = logging.getLogger("guardforce.init_db")


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    logging.basicConfig(level=getattr(settings, "LOG_LEVEL", "INFO"))
    db_config = dict(settings.DB_CONFIG)

    apply_schema(db_config)
    if settings.ADMIN_EMAIL and settings.ADMIN_PASSWORD:
        ensure_admin_user(db_config, email=settings.ADMIN_EMAIL.strip().lower(), password=settings.ADMIN_PASSWORD)

    tables = list_tables(db_config)
    logger.info(
        "Schema applied to %s@%s:%s/%s (tables=%d)",
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
        len(tables),
    )


if __name__ == "__main__":
    main()
