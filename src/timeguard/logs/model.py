from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from ..common.datetime_utils import from_iso, to_iso
from ..core.enums import LogKind


@dataclass(frozen=True)
class GeoPoint:
    latitude: float
    longitude: float

    def to_record(self) -> Dict[str, float]:
        return {"latitude": self.latitude, "longitude": self.longitude}

    @classmethod
    def from_record(cls, record: Optional[Dict[str, Any]]) -> Optional["GeoPoint"]:
        if not record:
            return None
        return cls(latitude=float(record["latitude"]), longitude=float(record["longitude"]))


@dataclass(frozen=True)
class NewLogEntry:
    """An attendance event before the audit log assigns it an identifier."""

    user_id: str
    user_name: str
    timestamp: datetime
    kind: LogKind
    ip: str
    location: Optional[GeoPoint] = None
    location_error: Optional[str] = None


@dataclass(frozen=True)
class LogEntry:
    """Immutable audit record of one check-in/check-out.

    ``user_name`` is a snapshot taken at event time; the entry outlives its user.
    """

    id: str
    user_id: str
    user_name: str
    timestamp: datetime
    kind: LogKind
    ip: str
    location: Optional[GeoPoint] = None
    location_error: Optional[str] = None

    @classmethod
    def from_new(cls, entry_id: str, entry: NewLogEntry) -> "LogEntry":
        return cls(
            id=entry_id,
            user_id=entry.user_id,
            user_name=entry.user_name,
            timestamp=entry.timestamp,
            kind=entry.kind,
            ip=entry.ip,
            location=entry.location,
            location_error=entry.location_error,
        )

    def to_record(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "user_name": self.user_name,
            "timestamp": to_iso(self.timestamp),
            "type": self.kind.value,
            "ip": self.ip,
            "location": self.location.to_record() if self.location else None,
            "location_error": self.location_error,
        }

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "LogEntry":
        return cls(
            id=str(record["id"]),
            user_id=str(record["user_id"]),
            user_name=record.get("user_name", ""),
            timestamp=from_iso(record["timestamp"]),
            kind=LogKind(record["type"]),
            ip=record.get("ip") or "",
            location=GeoPoint.from_record(record.get("location")),
            location_error=record.get("location_error"),
        )
