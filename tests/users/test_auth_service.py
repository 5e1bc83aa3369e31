from __future__ import annotations

import pytest

from timeguard.core.enums import AttendanceStatus, Role
from timeguard.core.exceptions import InvalidCredentials
from timeguard.users.model import SanitizedUser

from ..conftest import run


def test_login_returns_sanitized_user(auth):
    user = run(auth.login("alice", "alice123"))

    assert isinstance(user, SanitizedUser)
    assert not hasattr(user, "password")
    assert user.id == "emp-1"
    assert user.role == Role.EMPLOYEE
    assert user.status == AttendanceStatus.CHECKED_OUT


def test_login_wrong_password_raises_without_mutation(auth, store):
    before = dict((k, store._data[k]) for k in store.keys())

    with pytest.raises(InvalidCredentials):
        run(auth.login("alice", "wrong"))

    assert dict((k, store._data[k]) for k in store.keys()) == before


def test_login_unknown_username_raises(auth):
    with pytest.raises(InvalidCredentials):
        run(auth.login("mallory", "alice123"))


def test_login_username_is_exact_match(auth):
    with pytest.raises(InvalidCredentials):
        run(auth.login("ALICE", "alice123"))


def test_admin_login(auth):
    assert run(auth.login("admin", "admin")).is_admin
