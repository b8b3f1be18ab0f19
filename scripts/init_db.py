from __future__ import annotations

import importlib

from loguru import logger

from record_suite.config import get_settings_module
from record_suite.database.bootstrap import apply_schema, list_tables
from record_suite.database.connection import DBConfig, DatabaseConnection


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    conn = DatabaseConnection(DBConfig.from_dict(settings.DB_CONFIG))

    apply_schema(conn)
    tables = list_tables(conn)
    cfg = conn.config
    logger.info("OK: Applied schema.sql -> {}@{}:{}/{} (tables={})", cfg.user, cfg.host, cfg.port, cfg.database, len(tables))


if __name__ == "__main__":
    main()
