from __future__ import annotations

import asyncio
from datetime import datetime

import pytest

from timeguard.attendance.service import FAILURE_MESSAGE, GUARD_MESSAGE, AttendanceStateMachine
from timeguard.collaborators.geolocation import ClientGeolocation
from timeguard.core.enums import AttendanceStatus, LogKind
from timeguard.core.exceptions import AuthenticationError, OperationInProgress, UserNotFound, ValidationError
from timeguard.logs.model import GeoPoint
from timeguard.sessions.store import InMemorySessionStore

from ..conftest import run


class FailingIpLookup:
    async def get_ip(self) -> str:
        raise ConnectionError("network down")


class SlowGeolocation:
    async def get_location(self) -> GeoPoint:
        await asyncio.sleep(5)
        return GeoPoint(latitude=0.0, longitude=0.0)


class FailingDirectory:
    """Directory whose update always fails; everything else delegates."""

    def __init__(self, inner):
        self._inner = inner

    async def update_user(self, patch):
        raise UserNotFound(patch.id)


def _alice(auth):
    return run(auth.login("alice", "alice123"))


def test_alice_scenario_check_in(auth, machine, directory, audit_log, fixed_now):
    alice = _alice(auth)
    session = InMemorySessionStore(alice)

    result = run(
        machine.toggle(alice, session=session, geolocation=ClientGeolocation(latitude=1.5, longitude=2.5))
    )

    assert result.success
    assert result.message == "Successfully Checked in!"

    logs = run(audit_log.list_logs())
    assert len(logs) == 1
    assert logs[0].kind == LogKind.IN
    assert logs[0].user_id == "emp-1"
    assert logs[0].user_name == "Alice"
    assert logs[0].ip == "203.0.113.7"
    assert logs[0].location == GeoPoint(latitude=1.5, longitude=2.5)
    assert logs[0].location_error is None

    stored = run(directory.get_user("emp-1"))
    assert stored.status == AttendanceStatus.CHECKED_IN
    assert stored.last_check_in == fixed_now
    assert session.load() == stored


def test_two_toggles_return_to_start_and_keep_check_in_time(auth, machine, directory, clock, fixed_now):
    alice = _alice(auth)
    session = InMemorySessionStore(alice)

    first = run(machine.toggle(alice, session=session))
    clock.now = datetime(2025, 3, 10, 17, 45, 0)
    second = run(machine.toggle(session.load(), session=session))

    assert first.success and second.success
    assert second.message == "Successfully Checked out!"
    assert second.entry.kind == LogKind.OUT

    stored = run(directory.get_user("emp-1"))
    assert stored.status == AttendanceStatus.CHECKED_OUT
    assert stored.last_check_in == fixed_now


def test_toggle_keeps_stored_password(auth, machine, users_repo):
    run(machine.toggle(_alice(auth)))

    users = run(users_repo.list_all())
    assert next(u for u in users if u.id == "emp-1").password == "alice123"


def test_no_user_is_rejected_without_side_effects(machine, audit_log):
    result = run(machine.toggle(None))

    assert not result.success
    assert result.message == GUARD_MESSAGE
    assert isinstance(result.failure, AuthenticationError)
    assert run(audit_log.list_logs()) == []


def test_second_toggle_while_in_flight_is_rejected(auth, directory, audit_log, clock):
    gate = asyncio.Event()

    class BlockingIpLookup:
        async def get_ip(self) -> str:
            await gate.wait()
            return "192.0.2.1"

    machine = AttendanceStateMachine(directory, audit_log, ip_lookup=BlockingIpLookup(), clock=clock)
    alice = _alice(auth)

    async def scenario():
        first = asyncio.ensure_future(machine.toggle(alice))
        await asyncio.sleep(0)
        second = await machine.toggle(alice)
        gate.set()
        return await first, second

    first, second = run(scenario())

    assert first.success
    assert not second.success
    assert isinstance(second.failure, OperationInProgress)
    assert len(run(audit_log.list_logs())) == 1
    assert not machine.is_in_flight("emp-1")


def test_ip_failure_uses_unavailable_sentinel(auth, machine, audit_log):
    result = run(machine.toggle(_alice(auth), ip_lookup=FailingIpLookup()))

    assert result.success
    assert run(audit_log.list_logs())[0].ip == "Unavailable"


def test_geolocation_failure_is_recorded_but_not_blocking(auth, machine, audit_log):
    result = run(machine.toggle(_alice(auth), geolocation=ClientGeolocation.from_payload({"error": "PERMISSION_DENIED"})))

    entry = run(audit_log.list_logs())[0]
    assert result.success
    assert entry.location is None
    assert entry.location_error == "User denied the request for Geolocation."


def test_geolocation_wait_is_bounded(auth, machine, audit_log):
    result = run(machine.toggle(_alice(auth), geolocation=SlowGeolocation()))

    assert result.success
    assert run(audit_log.list_logs())[0].location_error == "The request to get user location timed out."


def test_update_failure_is_generic_and_log_entry_remains(auth, directory, audit_log, clock):
    machine = AttendanceStateMachine(
        FailingDirectory(directory), audit_log, ip_lookup=FailingIpLookup(), clock=clock
    )
    alice = _alice(auth)
    session = InMemorySessionStore(alice)

    result = run(machine.toggle(alice, session=session))

    assert not result.success
    assert result.message == FAILURE_MESSAGE
    assert isinstance(result.failure, UserNotFound)
    assert result.failure_kind == "UserNotFound"
    assert len(run(audit_log.list_logs())) == 1
    assert run(directory.get_user("emp-1")).status == AttendanceStatus.CHECKED_OUT
    assert session.load() == alice
    assert not machine.is_in_flight("emp-1")


def test_toggle_for_deleted_user_fails_generically(auth, machine, directory):
    alice = _alice(auth)
    run(directory.delete_user("emp-1"))

    result = run(machine.toggle(alice))

    assert not result.success
    assert result.message == FAILURE_MESSAGE


def test_qr_toggle_requires_office_token(auth, machine, audit_log):
    alice = _alice(auth)

    with pytest.raises(ValidationError):
        run(machine.toggle_with_qr(alice, "SOMETHING_ELSE", expected_token="OFFICE"))
    with pytest.raises(ValidationError):
        run(machine.toggle_with_qr(alice, "   ", expected_token="OFFICE"))
    assert run(audit_log.list_logs()) == []

    result = run(machine.toggle_with_qr(alice, " OFFICE ", expected_token="OFFICE"))
    assert result.success
