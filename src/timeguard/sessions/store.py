from __future__ import annotations

import json
import logging
from typing import Optional, Protocol

from ..core.constants import SESSION_KEY
from ..users.model import SanitizedUser

logger = logging.getLogger(__name__)


class SessionStore(Protocol):
    """Browser-session scoped storage for the authenticated (sanitized) user."""

    def load(self) -> Optional[SanitizedUser]:
        raise NotImplementedError

    def save(self, user: SanitizedUser) -> None:
        raise NotImplementedError

    def clear(self) -> None:
        raise NotImplementedError


def _decode(payload: Optional[str]) -> Optional[SanitizedUser]:
    if not payload:
        return None
    try:
        return SanitizedUser.from_record(json.loads(payload))
    except (ValueError, KeyError, TypeError) as e:
        logger.warning("Discarding unreadable session payload: %s", e)
        return None


def _encode(user: SanitizedUser) -> str:
    return json.dumps(user.to_record())


class InMemorySessionStore(SessionStore):
    def __init__(self, user: Optional[SanitizedUser] = None):
        self._payload: Optional[str] = _encode(user) if user else None

    def load(self) -> Optional[SanitizedUser]:
        return _decode(self._payload)

    def save(self, user: SanitizedUser) -> None:
        self._payload = _encode(user)

    def clear(self) -> None:
        self._payload = None


class FlaskSessionStore(SessionStore):
    """Stores the user in Flask's cookie session (non-permanent, dies with the browser session)."""

    def __init__(self, session, *, key: str = SESSION_KEY):
        self._session = session
        self._key = key

    def load(self) -> Optional[SanitizedUser]:
        return _decode(self._session.get(self._key))

    def save(self, user: SanitizedUser) -> None:
        self._session.permanent = False
        self._session[self._key] = _encode(user)

    def clear(self) -> None:
        self._session.pop(self._key, None)
