from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import List, Optional

from ..core.exceptions import DataLoadFailure
from ..logs.model import LogEntry
from ..logs.service import AuditLogService
from ..users.model import SanitizedUser
from ..users.service import DirectoryService
from .store import SessionStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StartupState:
    users: List[SanitizedUser]
    logs: List[LogEntry]
    session_user: Optional[SanitizedUser]


class SessionRevalidator:
    """Use case: application start.

    Loads the directory and the audit log together, then keeps the stored session
    only if its user still exists.
    """

    def __init__(self, directory: DirectoryService, audit_log: AuditLogService):
        self._directory = directory
        self._audit_log = audit_log

    async def start(self, session: SessionStore) -> StartupState:
        try:
            users, logs = await asyncio.gather(self._directory.list_users(), self._audit_log.list_logs())
        except Exception as e:
            logger.error("Failed to load initial data: %s", e)
            if isinstance(e, DataLoadFailure):
                raise
            raise DataLoadFailure() from e

        stored = session.load()
        session_user: Optional[SanitizedUser] = None
        if stored is not None:
            if any(u.id == stored.id for u in users):
                session_user = stored
            else:
                logger.info("Discarding session for removed user id=%s", stored.id)
                session.clear()

        return StartupState(users=users, logs=logs, session_user=session_user)
