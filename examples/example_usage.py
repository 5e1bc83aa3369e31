"""Example: drive the service layer directly (no Flask).

Controllers are a thin layer; the attendance rules live in the services.
"""

import asyncio
import importlib

from timeguard.collaborators.geolocation import ClientGeolocation
from timeguard.config import get_settings_module
from timeguard.container import build_container
from timeguard.sessions.store import InMemorySessionStore


async def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(settings=settings)
    session = InMemorySessionStore()

    state = await container.session_revalidator.start(session)
    print("users:", [u.username for u in state.users])

    alice = await container.auth_service.login("alice", "alice123")
    session.save(alice)

    result = await container.attendance_service.toggle(
        alice,
        session=session,
        geolocation=ClientGeolocation(latitude=52.52, longitude=13.405),
    )
    print(result.message, session.load().status.value)
    print(await container.audit_log_service.list_logs(limit=5))


if __name__ == "__main__":
    asyncio.run(main())
