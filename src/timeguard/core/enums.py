from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for authorization."""

    ADMIN = "Admin"
    EMPLOYEE = "Employee"


class AttendanceStatus(str, Enum):
    """Current attendance state of a user."""

    CHECKED_IN = "Checked In"
    CHECKED_OUT = "Checked Out"

    def complement(self) -> "AttendanceStatus":
        if self is AttendanceStatus.CHECKED_IN:
            return AttendanceStatus.CHECKED_OUT
        return AttendanceStatus.CHECKED_IN


class LogKind(str, Enum):
    """Event kind recorded in the audit log."""

    IN = "in"
    OUT = "out"

    @classmethod
    def for_status(cls, status: AttendanceStatus) -> "LogKind":
        return cls.IN if status is AttendanceStatus.CHECKED_IN else cls.OUT
