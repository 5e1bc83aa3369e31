from __future__ import annotations

from dataclasses import fields

import pytest

from timeguard.core.enums import AttendanceStatus, Role
from timeguard.core.exceptions import DuplicateUserId, DuplicateUsername, UserNotFound, ValidationError
from timeguard.users.model import SanitizedUser, User, UserPatch

from ..conftest import run


def _candidate(user_id="emp-9", username="dana", password="dana123") -> User:
    return User(id=user_id, name="Dana", username=username, role=Role.EMPLOYEE, password=password)


def _stored_password(users_repo, user_id):
    users = run(users_repo.list_all())
    return next(u.password for u in users if u.id == user_id)


def test_list_users_is_sanitized_and_in_store_order(directory):
    users = run(directory.list_users())

    assert [u.id for u in users] == ["admin-1", "emp-1", "emp-2", "emp-3"]
    assert all(isinstance(u, SanitizedUser) for u in users)
    assert "password" not in {f.name for f in fields(SanitizedUser)}
    assert all("password" not in u.to_record() for u in users)


def test_add_user_appends_and_returns_sanitized(directory, users_repo):
    created = run(directory.add_user(_candidate()))

    assert isinstance(created, SanitizedUser)
    assert [u.id for u in run(directory.list_users())][-1] == "emp-9"
    assert _stored_password(users_repo, "emp-9") == "dana123"


def test_duplicate_username_rejected_and_collection_unchanged(directory):
    before = run(directory.list_users())

    with pytest.raises(DuplicateUsername):
        run(directory.add_user(_candidate(username="alice")))

    assert run(directory.list_users()) == before


def test_username_match_is_case_sensitive(directory):
    run(directory.add_user(_candidate(username="Alice")))

    usernames = [u.username for u in run(directory.list_users())]
    assert "Alice" in usernames and "alice" in usernames


def test_sequence_of_adds_keeps_usernames_unique(directory):
    for i, name in enumerate(["dana", "erin", "dana", "frank", "erin", "bob"]):
        try:
            run(directory.add_user(_candidate(user_id=f"n-{i}", username=name)))
        except DuplicateUsername:
            pass

    usernames = [u.username for u in run(directory.list_users())]
    assert len(usernames) == len(set(usernames))
    assert len(usernames) == 7


def test_add_user_requires_password(directory):
    with pytest.raises(ValidationError):
        run(directory.add_user(_candidate(password="")))


def test_update_with_empty_password_keeps_stored_password(directory, users_repo):
    updated = run(directory.update_user(UserPatch(id="emp-1", name="Alice Liddell", password="")))

    assert updated.name == "Alice Liddell"
    assert _stored_password(users_repo, "emp-1") == "alice123"


def test_update_with_absent_password_keeps_stored_password(directory, users_repo):
    run(directory.update_user(UserPatch(id="emp-1", status=AttendanceStatus.CHECKED_IN)))

    assert _stored_password(users_repo, "emp-1") == "alice123"


def test_update_with_new_password_replaces_it(directory, users_repo):
    updated = run(directory.update_user(UserPatch(id="emp-1", password="s3cret")))

    assert _stored_password(users_repo, "emp-1") == "s3cret"
    assert "password" not in updated.to_record()


def test_update_unknown_user_raises(directory):
    with pytest.raises(UserNotFound):
        run(directory.update_user(UserPatch(id="ghost", name="Nobody")))


def test_update_cannot_take_another_users_username(directory):
    with pytest.raises(DuplicateUsername):
        run(directory.update_user(UserPatch(id="emp-2", username="alice")))

    assert run(directory.get_user("emp-2")).username == "bob"


def test_delete_user_removes_record(directory):
    run(directory.delete_user("emp-2"))

    assert "emp-2" not in [u.id for u in run(directory.list_users())]


def test_delete_unknown_user_is_noop(directory):
    run(directory.delete_user("ghost"))

    assert len(run(directory.list_users())) == 4


def test_duplicate_id_rejected_and_collection_unchanged(directory):
    before = run(directory.list_users())

    with pytest.raises(DuplicateUserId):
        run(directory.add_user(_candidate(user_id="emp-1", username="mallory")))

    assert run(directory.list_users()) == before
    assert [u.id for u in before].count("emp-1") == 1


@pytest.mark.parametrize("patch", [UserPatch(id="emp-1", username=""), UserPatch(id="emp-1", name="  ")])
def test_update_rejects_blank_name_or_username(directory, patch):
    with pytest.raises(ValidationError):
        run(directory.update_user(patch))

    stored = run(directory.get_user("emp-1"))
    assert (stored.name, stored.username) == ("Alice", "alice")
