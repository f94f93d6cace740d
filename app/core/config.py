from functools import lru_cache
from typing import Optional
from urllib.parse import urlparse

from pydantic import AnyHttpUrl, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ALLOWED_RATE_PROVIDERS = {"static", "exchangerate-api"}


class Settings(BaseSettings):
    """Application settings loaded from environment with defaults.

    Environment variable mapping follows pydantic's rules (e.g., APP_NAME, DEBUG,
    EXCHANGE_RATE_PROVIDER, EXCHANGE_API_KEY, MAX_SESSIONS).
    """

    model_config = SettingsConfigDict(
        env_file=".env", case_sensitive=False, extra="ignore"
    )

    # Basic app metadata
    app_name: str = "Currency Converter"
    debug: bool = False
    version: str = "0.1.0"

    # Exchange rates
    exchange_rate_provider: str = "exchangerate-api"
    exchange_api_base_url: AnyHttpUrl = "https://v6.exchangerate-api.com/v6"
    exchange_api_key: SecretStr = SecretStr("")
    http_timeout_seconds: float = 5.0

    # Offline detection before a fetch is attempted
    connectivity_check_enabled: bool = True
    connectivity_check_host: Optional[str] = None  # derived from api url if not provided

    # Converter defaults
    default_source_currency: str = "USD"
    default_target_currency: str = "PHP"
    flag_cdn_base_url: str = "https://flagcdn.com/w640"

    # Sessions live in memory only; oldest evicted past this bound
    max_sessions: int = 1000

    @field_validator("exchange_rate_provider")
    @classmethod
    def known_provider(cls, v: str) -> str:
        if v not in ALLOWED_RATE_PROVIDERS:
            raise ValueError(
                f"Unsupported exchange_rate_provider '{v}'. Allowed: {ALLOWED_RATE_PROVIDERS}"
            )
        return v

    @field_validator("default_source_currency", "default_target_currency")
    @classmethod
    def upper_code(cls, v: str) -> str:
        return v.strip().upper()

    @field_validator("max_sessions")
    @classmethod
    def positive_bound(cls, v: int) -> int:
        if v < 1:
            raise ValueError("max_sessions must be at least 1")
        return v

    @property
    def api_base(self) -> str:
        return str(self.exchange_api_base_url).rstrip("/")

    @property
    def probe_host(self) -> str:
        """Host resolved by the connectivity probe."""
        if self.connectivity_check_host:
            return self.connectivity_check_host
        return urlparse(self.api_base).hostname or "localhost"


@lru_cache
def get_settings() -> Settings:
    return Settings()
