from __future__ import annotations

import logging
from typing import Protocol

import aiohttp

from ..core.constants import DEFAULT_IP_LOOKUP_TIMEOUT_SECONDS, DEFAULT_IP_LOOKUP_URL, IP_UNAVAILABLE

logger = logging.getLogger(__name__)


class IpLookup(Protocol):
    async def get_ip(self) -> str:
        raise NotImplementedError


class IpifyLookup:
    """Public IP from an ipify-compatible endpoint; ``"Unavailable"`` on any failure."""

    def __init__(self, url: str = DEFAULT_IP_LOOKUP_URL, *, timeout: float = DEFAULT_IP_LOOKUP_TIMEOUT_SECONDS):
        self._url = url
        self._timeout = aiohttp.ClientTimeout(total=timeout)

    async def get_ip(self) -> str:
        try:
            async with aiohttp.ClientSession(timeout=self._timeout) as session:
                async with session.get(self._url) as response:
                    if response.status != 200:
                        raise aiohttp.ClientResponseError(
                            response.request_info,
                            response.history,
                            status=response.status,
                            message="Failed to fetch IP address",
                        )
                    data = await response.json(content_type=None)
                    return str(data["ip"])
        except Exception as e:
            logger.warning("IP fetch error: %s", e)
            return IP_UNAVAILABLE


class StaticIpLookup:
    """Returns a known address, e.g. the request's remote address."""

    def __init__(self, ip: str | None):
        self._ip = ip or IP_UNAVAILABLE

    async def get_ip(self) -> str:
        return self._ip
