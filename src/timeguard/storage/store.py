from __future__ import annotations

import asyncio
import json
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence

from ..core.constants import LOGS_KEY, USERS_KEY
from ..core.exceptions import DataLoadFailure
from .seed import seed_users

logger = logging.getLogger(__name__)

Record = Dict[str, Any]


class CollectionStore(ABC):
    """Whole-collection key-value storage with simulated network latency.

    Every ``load``/``save`` sleeps ``latency`` seconds before touching the backend.
    There is no partial update and no locking: callers read the full collection,
    compute the new one and write it back, so concurrent writers are last-write-wins.
    """

    def __init__(self, *, latency: float = 0.0):
        self._latency = float(latency)
        self._seeded = False

    @property
    def latency(self) -> float:
        return self._latency

    @abstractmethod
    def _read(self, key: str) -> Optional[str]:
        raise NotImplementedError

    @abstractmethod
    def _write(self, key: str, payload: str) -> None:
        raise NotImplementedError

    async def _read_async(self, key: str) -> Optional[str]:
        return self._read(key)

    async def _write_async(self, key: str, payload: str) -> None:
        self._write(key, payload)

    async def _simulate_delay(self) -> None:
        if self._latency > 0:
            await asyncio.sleep(self._latency)

    def ensure_seeded(self) -> None:
        """Write the seed directory and an empty log, only where a key is absent."""
        if self._seeded:
            return
        if self._read(USERS_KEY) is None:
            logger.info("Bootstrapping %s with seed directory", USERS_KEY)
            self._write(USERS_KEY, json.dumps(seed_users()))
        if self._read(LOGS_KEY) is None:
            self._write(LOGS_KEY, json.dumps([]))
        self._seeded = True

    async def load(self, collection: str) -> List[Record]:
        await self._simulate_delay()
        try:
            payload = await self._read_async(collection)
            if payload is None:
                return []
            records = json.loads(payload)
        except DataLoadFailure:
            raise
        except Exception as e:
            logger.error("Failed to load collection %s: %s", collection, e)
            raise DataLoadFailure() from e
        if not isinstance(records, list):
            raise DataLoadFailure()
        return records

    async def save(self, collection: str, records: Sequence[Record]) -> None:
        await self._simulate_delay()
        await self._write_async(collection, json.dumps(list(records)))


class InMemoryCollectionStore(CollectionStore):
    """Keeps serialized collections in a dict; used for tests and the demo backend."""

    def __init__(self, *, latency: float = 0.0, initial: Optional[Dict[str, str]] = None, seed: bool = True):
        super().__init__(latency=latency)
        self._data: Dict[str, str] = dict(initial or {})
        if seed:
            self.ensure_seeded()

    def _read(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def _write(self, key: str, payload: str) -> None:
        self._data[key] = payload

    def keys(self) -> List[str]:
        return list(self._data)
