import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.main import create_app
from app.services.rates.assets import AssetResolver
from app.services.rates.base import RateProvider
from app.services.session import ConversionSession
from app.services.session_store import SessionStore


class GatedRateProvider(RateProvider):
    """Holds every fetch until ``release()`` so tests can interleave events."""

    name = "gated"

    def __init__(self, rate: float):
        self.rate = rate
        self.calls = []
        self._gate = asyncio.Event()

    def release(self) -> None:
        self._gate.set()

    async def get_pair_rate(self, source: str, target: str) -> float:
        self.calls.append((source, target))
        await self._gate.wait()
        return self.rate


@pytest.fixture
def mock_provider():
    provider = MagicMock(spec=RateProvider)
    provider.name = "mock"
    provider.get_pair_rate = AsyncMock(return_value=56.0)
    provider.aclose = AsyncMock()
    return provider


@pytest.fixture
def online_probe():
    probe = MagicMock()
    probe.is_online = AsyncMock(return_value=True)
    return probe


@pytest.fixture
def offline_probe():
    probe = MagicMock()
    probe.is_online = AsyncMock(return_value=False)
    return probe


@pytest.fixture
def session(mock_provider, online_probe):
    return ConversionSession(mock_provider, source="USD", target="PHP", probe=online_probe)


@pytest.fixture
def assets():
    return AssetResolver("https://flagcdn.com/w640")


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        exchange_rate_provider="static",
        connectivity_check_enabled=False,
    )


@pytest.fixture
def store(mock_provider, online_probe):
    return SessionStore(mock_provider, probe=online_probe)


@pytest.fixture
def client(settings, store):
    app = create_app(settings_override=settings, store_override=store)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def gated_provider():
    return GatedRateProvider(rate=56.0)
