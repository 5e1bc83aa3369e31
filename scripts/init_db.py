from __future__ import annotations

import importlib

from dotenv import load_dotenv

from timeguard.config import get_settings_module
from timeguard.storage.bootstrap import apply_schema, list_tables
from timeguard.storage.connection import DatabaseConnection, DBConfig
from timeguard.storage.mysql_store import MySQLCollectionStore


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    config = DBConfig.from_dict(dict(settings.DB_CONFIG))
    conn = DatabaseConnection.get_instance(config)

    apply_schema(conn)
    MySQLCollectionStore(conn).ensure_seeded()
    tables = list_tables(conn)
    print(
        "OK: kv_store ready and seeded -> "
        f"{config.user}@{config.host}:{config.port}/{config.database} "
        f"(tables={len(tables)})"
    )


if __name__ == "__main__":
    main()
