from __future__ import annotations

"""Connectivity probes used to tell "offline" apart from a failing service."""
import asyncio
import logging
import socket
from typing import Protocol

logger = logging.getLogger("app.connectivity")


class ConnectivityProbe(Protocol):
    async def is_online(self) -> bool: ...


class AlwaysOnlineProbe:
    async def is_online(self) -> bool:
        return True


class DnsConnectivityProbe:
    """Considers the host reachable when its name resolves."""

    def __init__(self, host: str, port: int = 443, timeout: float = 2.0):
        self.host = host
        self.port = port
        self.timeout = timeout

    async def is_online(self) -> bool:
        loop = asyncio.get_running_loop()
        try:
            await asyncio.wait_for(
                loop.getaddrinfo(self.host, self.port, type=socket.SOCK_STREAM),
                timeout=self.timeout,
            )
        except (OSError, asyncio.TimeoutError) as e:
            logger.warning("connectivity probe failed for %s: %s", self.host, e)
            return False
        return True
