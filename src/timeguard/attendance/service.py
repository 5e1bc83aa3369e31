from __future__ import annotations

import asyncio
import logging
import threading
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional, Set, Tuple

from ..collaborators.geolocation import ERROR_MESSAGES, TIMEOUT, UNKNOWN_ERROR, UNSUPPORTED, GeolocationProvider
from ..collaborators.ip_lookup import IpLookup
from ..common.datetime_utils import now_local
from ..core.constants import DEFAULT_GEOLOCATION_TIMEOUT_SECONDS, IP_UNAVAILABLE
from ..core.enums import AttendanceStatus, LogKind
from ..core.exceptions import AuthenticationError, CollaboratorUnavailable, OperationInProgress, ValidationError
from ..logs.model import GeoPoint, LogEntry, NewLogEntry
from ..logs.service import AuditLogService
from ..sessions.store import SessionStore
from ..users.model import SanitizedUser, UserPatch
from ..users.service import DirectoryService

logger = logging.getLogger(__name__)

GUARD_MESSAGE = "Another operation is in progress or user not logged in."
FAILURE_MESSAGE = "Check-in process failed. Please try again."
INVALID_QR_MESSAGE = "Invalid or expired QR code."


@dataclass(frozen=True)
class ToggleResult:
    """Outcome shown to the user.

    ``message`` never says which step failed; ``failure`` keeps the original
    exception for logs and diagnostics.
    """

    success: bool
    message: str
    user: Optional[SanitizedUser] = None
    entry: Optional[LogEntry] = None
    failure: Optional[Exception] = None

    @property
    def failure_kind(self) -> Optional[str]:
        return type(self.failure).__name__ if self.failure is not None else None


class AttendanceStateMachine:
    """Use case: flip a user between Checked Out and Checked In.

    One toggle runs: gather IP and location, append the log entry, update the user,
    republish the session. The log append and the user update are not rolled back
    against each other.
    """

    def __init__(
        self,
        directory: DirectoryService,
        audit_log: AuditLogService,
        *,
        ip_lookup: IpLookup,
        geolocation_timeout: float = DEFAULT_GEOLOCATION_TIMEOUT_SECONDS,
        clock: Callable[[], datetime] = now_local,
    ):
        self._directory = directory
        self._audit_log = audit_log
        self._ip_lookup = ip_lookup
        self._geolocation_timeout = float(geolocation_timeout)
        self._clock = clock
        self._in_flight: Set[str] = set()
        self._lock = threading.Lock()

    def is_in_flight(self, user_id: str) -> bool:
        with self._lock:
            return user_id in self._in_flight

    def _acquire(self, user_id: str) -> bool:
        with self._lock:
            if user_id in self._in_flight:
                return False
            self._in_flight.add(user_id)
            return True

    def _release(self, user_id: str) -> None:
        with self._lock:
            self._in_flight.discard(user_id)

    async def _lookup_ip(self, ip_lookup: Optional[IpLookup]) -> str:
        try:
            return await (ip_lookup or self._ip_lookup).get_ip()
        except Exception as e:
            logger.warning("IP lookup failed: %s", e)
            return IP_UNAVAILABLE

    async def _locate(self, geolocation: Optional[GeolocationProvider]) -> Tuple[Optional[GeoPoint], Optional[str]]:
        if geolocation is None:
            return None, ERROR_MESSAGES[UNSUPPORTED]
        try:
            location = await asyncio.wait_for(geolocation.get_location(), timeout=self._geolocation_timeout)
            return location, None
        except asyncio.TimeoutError:
            return None, ERROR_MESSAGES[TIMEOUT]
        except CollaboratorUnavailable as e:
            return None, str(e)
        except Exception as e:
            logger.warning("Geolocation provider error: %s", e)
            return None, str(e) or UNKNOWN_ERROR

    async def toggle(
        self,
        current_user: Optional[SanitizedUser],
        *,
        session: Optional[SessionStore] = None,
        geolocation: Optional[GeolocationProvider] = None,
        ip_lookup: Optional[IpLookup] = None,
    ) -> ToggleResult:
        if current_user is None:
            return ToggleResult(False, GUARD_MESSAGE, failure=AuthenticationError("No authenticated user."))
        if not self._acquire(current_user.id):
            return ToggleResult(False, GUARD_MESSAGE, failure=OperationInProgress())

        try:
            ip = await self._lookup_ip(ip_lookup)
            location, location_error = await self._locate(geolocation)
            if location_error:
                logger.warning("Geolocation unavailable for user id=%s: %s", current_user.id, location_error)

            new_status = current_user.status.complement()
            kind = LogKind.for_status(new_status)
            now = self._clock()

            entry = await self._audit_log.append_log(
                NewLogEntry(
                    user_id=current_user.id,
                    user_name=current_user.name,
                    timestamp=now,
                    kind=kind,
                    ip=ip,
                    location=location,
                    location_error=location_error,
                )
            )

            last_check_in = now if new_status is AttendanceStatus.CHECKED_IN else current_user.last_check_in
            saved = await self._directory.update_user(
                UserPatch.from_user(current_user, status=new_status, last_check_in=last_check_in)
            )

            if session is not None:
                session.save(saved)

            logger.info("User id=%s checked %s (log=%s)", saved.id, kind.value, entry.id)
            return ToggleResult(True, f"Successfully Checked {kind.value}!", user=saved, entry=entry)
        except Exception as e:
            logger.exception("Toggle failed for user id=%s (%s)", current_user.id, type(e).__name__)
            return ToggleResult(False, FAILURE_MESSAGE, failure=e)
        finally:
            self._release(current_user.id)

    async def toggle_with_qr(
        self,
        current_user: Optional[SanitizedUser],
        scanned_code: str,
        *,
        expected_token: str,
        **kwargs,
    ) -> ToggleResult:
        """Toggle only when the decoded QR payload is the office token."""
        code = (scanned_code or "").strip()
        if not code:
            raise ValidationError("QR code must not be empty.")
        if code != expected_token:
            raise ValidationError(INVALID_QR_MESSAGE)
        return await self.toggle(current_user, **kwargs)
