from __future__ import annotations

from typing import Any, Dict, Optional, Protocol

from ..core.exceptions import CollaboratorUnavailable
from ..logs.model import GeoPoint

PERMISSION_DENIED = "PERMISSION_DENIED"
POSITION_UNAVAILABLE = "POSITION_UNAVAILABLE"
TIMEOUT = "TIMEOUT"
UNSUPPORTED = "UNSUPPORTED"

ERROR_MESSAGES = {
    PERMISSION_DENIED: "User denied the request for Geolocation.",
    POSITION_UNAVAILABLE: "Location information is unavailable.",
    TIMEOUT: "The request to get user location timed out.",
    UNSUPPORTED: "Geolocation is not supported by your browser.",
}
UNKNOWN_ERROR = "An unknown error occurred."


class GeolocationProvider(Protocol):
    async def get_location(self) -> GeoPoint:
        """Return the current position or raise ``CollaboratorUnavailable`` with a readable reason."""
        raise NotImplementedError


class ClientGeolocation:
    """Position reported by the browser alongside the request.

    The payload is ``{"latitude": .., "longitude": ..}`` or ``{"error": "<CODE>"}``.
    A missing payload counts as unsupported.
    """

    def __init__(
        self,
        *,
        latitude: Optional[float] = None,
        longitude: Optional[float] = None,
        error_code: Optional[str] = None,
    ):
        self._latitude = latitude
        self._longitude = longitude
        self._error_code = error_code

    @classmethod
    def from_payload(cls, payload: Optional[Dict[str, Any]]) -> "ClientGeolocation":
        if not payload:
            return cls(error_code=UNSUPPORTED)
        if payload.get("error"):
            return cls(error_code=str(payload["error"]).upper())
        try:
            return cls(latitude=float(payload["latitude"]), longitude=float(payload["longitude"]))
        except (KeyError, TypeError, ValueError):
            return cls(error_code=POSITION_UNAVAILABLE)

    async def get_location(self) -> GeoPoint:
        if self._error_code is not None:
            raise CollaboratorUnavailable(ERROR_MESSAGES.get(self._error_code, UNKNOWN_ERROR))
        return GeoPoint(latitude=self._latitude, longitude=self._longitude)
