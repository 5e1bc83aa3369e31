from __future__ import annotations

from typing import Dict

from timeguard.core.constants import LOGS_KEY, USERS_KEY
from timeguard.storage.mysql_store import MySQLCollectionStore

from ..conftest import run


class FakeCursor:
    def __init__(self, table: Dict[str, str]):
        self._table = table
        self._row = None

    def execute(self, sql, params=()):
        if sql.strip().startswith("SELECT"):
            key = params[0]
            self._row = {"payload": self._table[key]} if key in self._table else None
        else:
            key, payload = params
            self._table[key] = payload

    def fetchone(self):
        return self._row

    def close(self):
        pass


class FakeConnection:
    def __init__(self, table: Dict[str, str]):
        self._table = table
        self.committed = 0

    def cursor(self, dictionary=False):
        return FakeCursor(self._table)

    def commit(self):
        self.committed += 1

    def rollback(self):
        pass

    def close(self):
        pass


class FakeConnectionFactory:
    def __init__(self):
        self.table: Dict[str, str] = {}

    def connect(self, *, with_database: bool = True):
        return FakeConnection(self.table)


def test_mysql_store_seeds_and_persists_json_rows():
    factory = FakeConnectionFactory()
    store = MySQLCollectionStore(factory, latency=0)
    store.ensure_seeded()

    assert set(factory.table) == {USERS_KEY, LOGS_KEY}

    users = run(store.load(USERS_KEY))
    run(store.save(USERS_KEY, users[:1]))

    assert [u["id"] for u in run(store.load(USERS_KEY))] == ["admin-1"]
    assert factory.table[LOGS_KEY] == "[]"
