from __future__ import annotations

from typing import List

from .connection import DatabaseConnection
from .mysql_base import db_cursor

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS kv_store (
    store_key VARCHAR(191) NOT NULL PRIMARY KEY,
    payload LONGTEXT NOT NULL,
    updated_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP ON UPDATE CURRENT_TIMESTAMP
) CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci
"""


def ensure_database_exists(conn_factory: DatabaseConnection) -> None:
    database = conn_factory.config.database
    with db_cursor(conn_factory, dictionary=False, with_database=False) as (_, cur):
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )


def apply_schema(conn_factory: DatabaseConnection) -> None:
    ensure_database_exists(conn_factory)
    with db_cursor(conn_factory, dictionary=False) as (_, cur):
        cur.execute(SCHEMA_SQL)


def list_tables(conn_factory: DatabaseConnection) -> List[str]:
    with db_cursor(conn_factory, dictionary=False) as (_, cur):
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
