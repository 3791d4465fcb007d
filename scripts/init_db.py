from __future__ import annotations

import importlib

from dotenv import load_dotenv

from timeclock.config import get_settings_module
from timeclock.database.bootstrap import apply_schema, list_tables
from timeclock.database.connection import DatabaseConnection, DBConfig


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    apply_schema(conn)
    tables = list_tables(conn)
    print(
        "OK: Applied schema.sql -> "
        f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')} "
        f"(tables={len(tables)})"
    )


if __name__ == "__main__":
    main()
