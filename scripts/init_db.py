from __future__ import annotations

import importlib
import logging
from pathlib import Path

from dotenv import load_dotenv

from geo_attendance.config import get_settings_module
from geo_attendance.database.bootstrap import apply_schema, list_tables

SCHEMA_PATH = Path(__file__).resolve().parents[1] / "database" / "schema.sql"


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    logging.basicConfig(level=getattr(settings, "LOG_LEVEL", "INFO"))

    db_config = dict(settings.DB_CONFIG)
    apply_schema(db_config, schema_path=SCHEMA_PATH)

    target = f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}"
    print(f"OK: schema applied to {target}")
    for table in list_tables(db_config):
        print(f"  - {table}")


if __name__ == "__main__":
    main()
