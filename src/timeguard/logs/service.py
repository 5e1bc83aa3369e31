from __future__ import annotations

import time
import uuid
from typing import List, Optional

from .model import LogEntry, NewLogEntry
from .repository import LogRepository


def new_log_id() -> str:
    """``log-<epoch millis>-<random>``: sortable by creation time, unique within a millisecond."""
    return f"log-{int(time.time() * 1000)}-{uuid.uuid4().hex[:8]}"


class AuditLogService:
    """Append-only attendance log. Insertion position is the recency order."""

    def __init__(self, logs: LogRepository):
        self._logs = logs

    async def list_logs(self, *, user_id: Optional[str] = None, limit: Optional[int] = None) -> List[LogEntry]:
        entries = await self._logs.list_all()
        if user_id is not None:
            entries = [e for e in entries if e.user_id == user_id]
        if limit is not None:
            entries = entries[: max(int(limit), 0)]
        return entries

    async def append_log(self, entry: NewLogEntry) -> LogEntry:
        stored = LogEntry.from_new(new_log_id(), entry)
        entries = await self._logs.list_all()
        entries.insert(0, stored)
        await self._logs.save_all(entries)
        return stored
