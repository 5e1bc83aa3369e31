from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any, Dict, Optional

from ..common.datetime_utils import from_iso, to_iso
from ..core.enums import AttendanceStatus, Role


@dataclass(frozen=True)
class SanitizedUser:
    """A user without credentials; the only user shape that leaves the directory."""

    id: str
    name: str
    username: str
    role: Role
    status: AttendanceStatus = AttendanceStatus.CHECKED_OUT
    last_check_in: Optional[datetime] = None

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    def to_record(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "username": self.username,
            "role": self.role.value,
            "status": self.status.value,
            "last_check_in": to_iso(self.last_check_in),
        }

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "SanitizedUser":
        return cls(
            id=str(record["id"]),
            name=record["name"],
            username=record["username"],
            role=Role(record["role"]),
            status=AttendanceStatus(record.get("status") or AttendanceStatus.CHECKED_OUT.value),
            last_check_in=from_iso(record.get("last_check_in")),
        )


@dataclass(frozen=True)
class User:
    """Stored directory record.

    ``password`` is only ``None`` on values built outside the store (e.g. from a
    sanitized session user); stored records always carry one.
    """

    id: str
    name: str
    username: str
    role: Role
    status: AttendanceStatus = AttendanceStatus.CHECKED_OUT
    last_check_in: Optional[datetime] = None
    password: Optional[str] = None

    def sanitized(self) -> SanitizedUser:
        return SanitizedUser(
            id=self.id,
            name=self.name,
            username=self.username,
            role=self.role,
            status=self.status,
            last_check_in=self.last_check_in,
        )

    def to_record(self) -> Dict[str, Any]:
        record = self.sanitized().to_record()
        if self.password is not None:
            record["password"] = self.password
        return record

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "User":
        public = SanitizedUser.from_record(record)
        return cls(
            id=public.id,
            name=public.name,
            username=public.username,
            role=public.role,
            status=public.status,
            last_check_in=public.last_check_in,
            password=record.get("password"),
        )


@dataclass(frozen=True)
class UserPatch:
    """Field-by-field update for an existing user.

    ``None`` keeps the stored value. An empty password also keeps the stored one.
    """

    id: str
    name: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None
    role: Optional[Role] = None
    status: Optional[AttendanceStatus] = None
    last_check_in: Optional[datetime] = None

    def apply_to(self, user: User) -> User:
        return replace(
            user,
            name=self.name if self.name is not None else user.name,
            username=self.username if self.username is not None else user.username,
            password=self.password if self.password else user.password,
            role=self.role if self.role is not None else user.role,
            status=self.status if self.status is not None else user.status,
            last_check_in=self.last_check_in if self.last_check_in is not None else user.last_check_in,
        )

    @classmethod
    def from_user(cls, user: SanitizedUser, **changes) -> "UserPatch":
        """Full snapshot of ``user`` (no password) with ``changes`` applied."""
        fields = dict(
            id=user.id,
            name=user.name,
            username=user.username,
            role=user.role,
            status=user.status,
            last_check_in=user.last_check_in,
        )
        fields.update(changes)
        return cls(**fields)
