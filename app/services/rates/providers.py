from __future__ import annotations

"""Concrete rate providers and factory.

'static' serves fixed USD-based placeholders so the app runs without network or
API key; 'exchangerate-api' asks ExchangeRate-API's pair endpoint.
"""
import logging
import math
from typing import Any, Dict, Optional

import httpx

from app.core.config import Settings
from app.services.errors import OfflineError, ServiceError
from app.services.http_client import ConnectivityError, HttpError, get_json
from .base import RateProvider

logger = logging.getLogger("app.rates")

# Units of each currency per 1 USD
_STATIC_USD_RATES: Dict[str, float] = {
    "USD": 1.0,
    "AED": 3.6725,
    "ARS": 870.0,
    "AUD": 1.52,
    "BDT": 110.0,
    "BRL": 5.0,
    "CAD": 1.36,
    "CHF": 0.88,
    "CLP": 940.0,
    "CNY": 7.24,
    "COP": 3900.0,
    "CZK": 23.0,
    "DKK": 6.87,
    "EGP": 47.5,
    "EUR": 0.92,
    "GBP": 0.79,
    "HKD": 7.82,
    "HUF": 360.0,
    "IDR": 15800.0,
    "ILS": 3.7,
    "INR": 83.2,
    "JPY": 149.5,
    "KRW": 1340.0,
    "KWD": 0.307,
    "MXN": 17.0,
    "MYR": 4.7,
    "NGN": 1450.0,
    "NOK": 10.7,
    "NZD": 1.65,
    "PHP": 56.0,
    "PKR": 278.0,
    "PLN": 3.95,
    "QAR": 3.64,
    "SAR": 3.75,
    "SEK": 10.5,
    "SGD": 1.34,
    "THB": 36.0,
    "TRY": 32.0,
    "TWD": 32.0,
    "VND": 25000.0,
    "ZAR": 18.5,
}


def _validated_rate(value: Any, source: str, target: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ServiceError(f"No usable rate for {source}/{target}")
    rate = float(value)
    if not math.isfinite(rate) or rate <= 0:
        raise ServiceError(f"No usable rate for {source}/{target}")
    return rate


class StaticRateProvider(RateProvider):
    name = "static"

    def __init__(self, usd_rates: Optional[Dict[str, float]] = None):
        self._rates = dict(usd_rates or _STATIC_USD_RATES)

    async def get_pair_rate(self, source: str, target: str) -> float:  # type: ignore[override]
        src = self._rates.get(source.upper())
        tgt = self._rates.get(target.upper())
        if src is None or tgt is None:
            raise ServiceError(f"No static rate for {source}/{target}")
        return _validated_rate(tgt / src, source, target)


class ExchangeRateApiProvider(RateProvider):
    """Live rates from https://www.exchangerate-api.com (v6 pair endpoint).

    Response shape: {"result": "success", "conversion_rate": 56.0, ...}; any
    other ``result`` carries an ``error-type`` and is treated as a service error.
    """

    name = "exchangerate-api"

    def __init__(
        self,
        base_url: str,
        api_key: str,
        *,
        timeout: float = 5.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._timeout = timeout
        self._client = client

    @property
    def client(self) -> httpx.AsyncClient:
        """Shared connection pool, opened on first use."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout)
        return self._client

    def pair_url(self, source: str, target: str) -> str:
        return f"{self._base_url}/{self._api_key}/pair/{source.upper()}/{target.upper()}"

    async def get_pair_rate(self, source: str, target: str) -> float:  # type: ignore[override]
        try:
            data = await get_json(
                self.pair_url(source, target), timeout=self._timeout, client=self.client
            )
        except ConnectivityError as e:
            raise OfflineError(str(e)) from e
        except HttpError as e:
            raise ServiceError(str(e)) from e
        if data.get("result") != "success":
            raise ServiceError(
                f"Rate service rejected {source}/{target}: {data.get('error-type', 'unknown')}"
            )
        return _validated_rate(data.get("conversion_rate"), source, target)

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None


def make_rate_provider(settings: Settings) -> RateProvider:
    kind = settings.exchange_rate_provider
    if kind == "static":
        return StaticRateProvider()
    if kind == "exchangerate-api":
        key = settings.exchange_api_key.get_secret_value()
        if not key:
            logger.warning("exchange_api_key is empty; live rate requests will fail")
        return ExchangeRateApiProvider(
            settings.api_base,
            key,
            timeout=settings.http_timeout_seconds,
        )
    raise ValueError(f"Unknown rate provider kind '{kind}'")
