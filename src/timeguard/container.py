from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.service import AttendanceStateMachine
from .collaborators.ip_lookup import IpifyLookup, IpLookup, StaticIpLookup
from .logs.repository import StoreLogRepository
from .logs.service import AuditLogService
from .sessions.service import SessionRevalidator
from .storage.store import CollectionStore
from .users.repository import StoreUserRepository
from .users.service import AuthService, DirectoryService


@dataclass(frozen=True)
class Container:
    store: CollectionStore

    users_repo: StoreUserRepository
    logs_repo: StoreLogRepository

    auth_service: AuthService
    directory_service: DirectoryService
    audit_log_service: AuditLogService
    attendance_service: AttendanceStateMachine
    session_revalidator: SessionRevalidator

    # None means "use the caller's address" (see attendance controller)
    ip_lookup: Optional[IpLookup]


def build_store(settings) -> CollectionStore:
    latency = int(getattr(settings, "STORE_LATENCY_MS", 0)) / 1000.0
    backend = str(getattr(settings, "STORAGE_BACKEND", "memory")).lower()

    if backend == "mysql":
        from .storage.bootstrap import apply_schema
        from .storage.connection import DatabaseConnection, DBConfig
        from .storage.mysql_store import MySQLCollectionStore

        conn = DatabaseConnection.get_instance(DBConfig.from_dict(getattr(settings, "DB_CONFIG")))
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(conn)
        store = MySQLCollectionStore(conn, latency=latency)
        store.ensure_seeded()
        return store

    from .storage.store import InMemoryCollectionStore

    return InMemoryCollectionStore(latency=latency)


def build_container(*, settings, store: Optional[CollectionStore] = None) -> Container:
    store = store or build_store(settings)

    users_repo = StoreUserRepository(store)
    logs_repo = StoreLogRepository(store)

    ip_url = getattr(settings, "IP_LOOKUP_URL", "")
    ip_lookup: Optional[IpLookup] = (
        IpifyLookup(ip_url, timeout=float(getattr(settings, "IP_LOOKUP_TIMEOUT_SECONDS", 10))) if ip_url else None
    )

    auth_service = AuthService(users_repo)
    directory_service = DirectoryService(users_repo)
    audit_log_service = AuditLogService(logs_repo)
    attendance_service = AttendanceStateMachine(
        directory_service,
        audit_log_service,
        ip_lookup=ip_lookup or StaticIpLookup(None),
        geolocation_timeout=float(getattr(settings, "GEOLOCATION_TIMEOUT_SECONDS", 10)),
    )
    session_revalidator = SessionRevalidator(directory_service, audit_log_service)

    return Container(
        store=store,
        users_repo=users_repo,
        logs_repo=logs_repo,
        auth_service=auth_service,
        directory_service=directory_service,
        audit_log_service=audit_log_service,
        attendance_service=attendance_service,
        session_revalidator=session_revalidator,
        ip_lookup=ip_lookup,
    )
