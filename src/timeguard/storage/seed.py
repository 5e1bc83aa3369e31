from __future__ import annotations

from typing import Any, Dict, List

from ..core.enums import AttendanceStatus, Role


def _seed(user_id: str, name: str, username: str, password: str, role: Role) -> Dict[str, Any]:
    return {
        "id": user_id,
        "name": name,
        "username": username,
        "password": password,
        "role": role.value,
        "status": AttendanceStatus.CHECKED_OUT.value,
        "last_check_in": None,
    }


def seed_users() -> List[Dict[str, Any]]:
    """Demo directory written on first use: admin/admin, alice/alice123, bob/bob123, charlie/charlie123."""
    return [
        _seed("admin-1", "Admin User", "admin", "admin", Role.ADMIN),
        _seed("emp-1", "Alice", "alice", "alice123", Role.EMPLOYEE),
        _seed("emp-2", "Bob", "bob", "bob123", Role.EMPLOYEE),
        _seed("emp-3", "Charlie", "charlie", "charlie123", Role.EMPLOYEE),
    ]
