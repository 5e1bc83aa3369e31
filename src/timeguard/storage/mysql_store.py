from __future__ import annotations

import asyncio
from typing import Optional

from .connection import DatabaseConnection
from .mysql_base import db_cursor, fetchone
from .store import CollectionStore


class MySQLCollectionStore(CollectionStore):
    """Stores each collection as one JSON document row in ``kv_store``."""

    def __init__(self, conn_factory: DatabaseConnection, *, latency: float = 0.0):
        super().__init__(latency=latency)
        self._conn_factory = conn_factory

    def _read(self, key: str) -> Optional[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT payload FROM kv_store WHERE store_key=%s", (key,))
            row = fetchone(cur)
            if not row:
                return None
            return row["payload"]

    def _write(self, key: str, payload: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO kv_store(store_key, payload)
                VALUES(%s, %s)
                ON DUPLICATE KEY UPDATE payload=VALUES(payload)
                """,
                (key, payload),
            )

    async def _read_async(self, key: str) -> Optional[str]:
        return await asyncio.to_thread(self._read, key)

    async def _write_async(self, key: str, payload: str) -> None:
        await asyncio.to_thread(self._write, key, payload)
