from __future__ import annotations

from typing import List, Protocol, Sequence

from ..core.constants import LOGS_KEY
from ..storage.store import CollectionStore
from .model import LogEntry


class LogRepository(Protocol):
    """Whole-collection access to the audit log, newest first."""

    async def list_all(self) -> List[LogEntry]:
        raise NotImplementedError

    async def save_all(self, entries: Sequence[LogEntry]) -> None:
        raise NotImplementedError


class StoreLogRepository(LogRepository):
    def __init__(self, store: CollectionStore, *, key: str = LOGS_KEY):
        self._store = store
        self._key = key

    async def list_all(self) -> List[LogEntry]:
        records = await self._store.load(self._key)
        return [LogEntry.from_record(r) for r in records]

    async def save_all(self, entries: Sequence[LogEntry]) -> None:
        await self._store.save(self._key, [e.to_record() for e in entries])
