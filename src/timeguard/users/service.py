from __future__ import annotations

import logging
from typing import List, Optional

from ..common.validators import require_non_empty
from ..core.exceptions import DuplicateUserId, DuplicateUsername, InvalidCredentials, UserNotFound
from .model import SanitizedUser, User, UserPatch
from .repository import UserRepository

logger = logging.getLogger(__name__)


class AuthService:
    """Use case: authenticate user (login).

    Passwords are compared by plain equality; this is a demo gate, not a credential system.
    """

    def __init__(self, users: UserRepository):
        self._users = users

    async def login(self, username: str, password: str) -> SanitizedUser:
        users = await self._users.list_all()
        user = next((u for u in users if u.username == username), None)
        if not user or user.password != password:
            logger.info("Rejected login for username=%r", username)
            raise InvalidCredentials()
        return user.sanitized()


class DirectoryService:
    """Use case: manage users (admin) over the whole Users collection."""

    def __init__(self, users: UserRepository):
        self._users = users

    async def list_users(self) -> List[SanitizedUser]:
        return [u.sanitized() for u in await self._users.list_all()]

    async def get_user(self, user_id: str) -> Optional[SanitizedUser]:
        for u in await self._users.list_all():
            if u.id == user_id:
                return u.sanitized()
        return None

    async def add_user(self, candidate: User) -> SanitizedUser:
        require_non_empty(candidate.id, "Id")
        require_non_empty(candidate.name, "Name")
        require_non_empty(candidate.username, "Username")
        require_non_empty(candidate.password or "", "Password")

        users = await self._users.list_all()
        if any(u.id == candidate.id for u in users):
            raise DuplicateUserId(candidate.id)
        if any(u.username == candidate.username for u in users):
            raise DuplicateUsername(candidate.username)

        users.append(candidate)
        await self._users.save_all(users)
        logger.info("Added user id=%s username=%s", candidate.id, candidate.username)
        return candidate.sanitized()

    async def update_user(self, patch: UserPatch) -> SanitizedUser:
        if patch.name is not None:
            require_non_empty(patch.name, "Name")
        if patch.username is not None:
            require_non_empty(patch.username, "Username")

        users = await self._users.list_all()
        merged: Optional[User] = None
        out: List[User] = []
        for u in users:
            if u.id == patch.id:
                merged = patch.apply_to(u)
                out.append(merged)
            else:
                out.append(u)

        if merged is None:
            raise UserNotFound(patch.id)
        if any(u.id != merged.id and u.username == merged.username for u in out):
            raise DuplicateUsername(merged.username)

        await self._users.save_all(out)
        return merged.sanitized()

    async def delete_user(self, user_id: str) -> None:
        users = await self._users.list_all()
        remaining = [u for u in users if u.id != user_id]
        await self._users.save_all(remaining)
        if len(remaining) != len(users):
            logger.info("Deleted user id=%s", user_id)
