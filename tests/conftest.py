from __future__ import annotations

import asyncio
from datetime import datetime

import pytest

from timeguard.attendance.service import AttendanceStateMachine
from timeguard.collaborators.ip_lookup import StaticIpLookup
from timeguard.logs.repository import StoreLogRepository
from timeguard.logs.service import AuditLogService
from timeguard.sessions.service import SessionRevalidator
from timeguard.storage.store import InMemoryCollectionStore
from timeguard.users.repository import StoreUserRepository
from timeguard.users.service import AuthService, DirectoryService


def run(coro):
    return asyncio.run(coro)


class FixedClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2025, 3, 10, 8, 30, 0)


@pytest.fixture
def clock(fixed_now) -> FixedClock:
    return FixedClock(fixed_now)


@pytest.fixture
def store() -> InMemoryCollectionStore:
    return InMemoryCollectionStore(latency=0)


@pytest.fixture
def users_repo(store) -> StoreUserRepository:
    return StoreUserRepository(store)


@pytest.fixture
def directory(users_repo) -> DirectoryService:
    return DirectoryService(users_repo)


@pytest.fixture
def auth(users_repo) -> AuthService:
    return AuthService(users_repo)


@pytest.fixture
def audit_log(store) -> AuditLogService:
    return AuditLogService(StoreLogRepository(store))


@pytest.fixture
def machine(directory, audit_log, clock) -> AttendanceStateMachine:
    return AttendanceStateMachine(
        directory,
        audit_log,
        ip_lookup=StaticIpLookup("203.0.113.7"),
        geolocation_timeout=0.5,
        clock=clock,
    )


@pytest.fixture
def revalidator(directory, audit_log) -> SessionRevalidator:
    return SessionRevalidator(directory, audit_log)
