from __future__ import annotations

import importlib

from dotenv import load_dotenv

from timeclock.config import get_settings_module
from timeclock.database.connection import DatabaseConnection, DBConfig
from timeclock.database.seed import apply_seed
from timeclock.projects.mysql_project_repository import MySQLProjectRepository
from timeclock.users.mysql_user_repository import MySQLUserRepository
from timeclock.users.service import CredentialStore


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    store = CredentialStore(MySQLUserRepository(conn), hash_method=settings.PIN_HASH_METHOD)
    apply_seed(store, MySQLProjectRepository(conn))

    print(
        "OK: Seeded database -> "
        f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}"
    )


if __name__ == "__main__":
    main()
