from __future__ import annotations

from typing import List, Protocol, Sequence

from ..core.constants import USERS_KEY
from ..storage.store import CollectionStore
from .model import User


class UserRepository(Protocol):
    """Repository interface for the Users collection.

    Note (DIP): services depend on this interface, not on a concrete store.
    Reads and writes always cover the whole collection.
    """

    async def list_all(self) -> List[User]:
        raise NotImplementedError

    async def save_all(self, users: Sequence[User]) -> None:
        raise NotImplementedError


class StoreUserRepository(UserRepository):
    def __init__(self, store: CollectionStore, *, key: str = USERS_KEY):
        self._store = store
        self._key = key

    async def list_all(self) -> List[User]:
        records = await self._store.load(self._key)
        return [User.from_record(r) for r in records]

    async def save_all(self, users: Sequence[User]) -> None:
        await self._store.save(self._key, [u.to_record() for u in users])
