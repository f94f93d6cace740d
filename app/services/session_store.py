from __future__ import annotations

import logging
from collections import OrderedDict
from typing import Callable, Optional

from app.core.config import Settings
from app.services.connectivity import (
    AlwaysOnlineProbe,
    ConnectivityProbe,
    DnsConnectivityProbe,
)
from app.services.rates.base import RateProvider
from app.services.rates.providers import make_rate_provider
from app.services.session import ConversionSession

logger = logging.getLogger("app.sessions")


class SessionStore:
    """In-memory registry of live conversion sessions.

    One store per application instance. Sessions die with the process; past
    ``max_sessions`` the least recently used one is evicted.
    """

    def __init__(
        self,
        provider: RateProvider,
        *,
        probe: Optional[ConnectivityProbe] = None,
        default_source: str = "USD",
        default_target: str = "PHP",
        max_sessions: int = 1000,
    ):
        self.provider = provider
        self._probe = probe or AlwaysOnlineProbe()
        self._default_source = default_source
        self._default_target = default_target
        self._max = max_sessions
        self._sessions: "OrderedDict[str, ConversionSession]" = OrderedDict()

    def __len__(self) -> int:
        return len(self._sessions)

    def create(self) -> ConversionSession:
        session = ConversionSession(
            self.provider,
            source=self._default_source,
            target=self._default_target,
            probe=self._probe,
        )
        self._sessions[session.session_id] = session
        while len(self._sessions) > self._max:
            evicted, _ = self._sessions.popitem(last=False)
            logger.info("evicted session %s", evicted)
        return session

    def get(self, session_id: str) -> Optional[ConversionSession]:
        session = self._sessions.get(session_id)
        if session is not None:
            self._sessions.move_to_end(session_id)
        return session

    def get_or_create(self, session_id: Optional[str]) -> ConversionSession:
        session = self.get(session_id) if session_id else None
        return session or self.create()

    def delete(self, session_id: str) -> bool:
        return self._sessions.pop(session_id, None) is not None

    async def aclose(self) -> None:
        self._sessions.clear()
        await self.provider.aclose()


def build_session_store(
    settings: Settings,
    provider_factory: Callable[[Settings], RateProvider] = make_rate_provider,
) -> SessionStore:
    provider = provider_factory(settings)
    if settings.connectivity_check_enabled and provider.name != "static":
        probe: ConnectivityProbe = DnsConnectivityProbe(
            settings.probe_host, timeout=settings.http_timeout_seconds
        )
    else:
        probe = AlwaysOnlineProbe()
    return SessionStore(
        provider,
        probe=probe,
        default_source=settings.default_source_currency,
        default_target=settings.default_target_currency,
        max_sessions=settings.max_sessions,
    )
