from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

SESSION_TTL_SECONDS = 24 * 60 * 60  # fixed 24h session lifetime


@dataclass(frozen=True)
class AppConfig:
    # Session configuration
    session_secret: Optional[str]  # Required for session signing
    app_url: str  # Deployment base URL (OpenID realm + return URL)

    # Steam Web API
    steam_api_key: Optional[str]

    # Runtime
    environment: str  # production|development
    host: str
    port: int
    log_level: str

    # Inventory source
    inventory_app_id: int
    inventory_context_id: int
    inventory_count: int
    outbound_timeout_seconds: float

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    @property
    def cookie_secure(self) -> bool:
        """Secure cookies only in production; local dev runs over plain HTTP."""
        return self.is_production

    @property
    def session_ttl_seconds(self) -> int:
        return SESSION_TTL_SECONDS

    @property
    def return_url(self) -> str:
        return f"{self.app_url}/auth/steam/return"


def _env_str(name: str) -> Optional[str]:
    return (os.getenv(name, "") or "").strip() or None


def _env_int(name: str, default: int) -> int:
    raw = _env_str(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer (got {raw!r})") from None


@lru_cache(maxsize=1)
def load_config() -> AppConfig:
    """
    Load application configuration from environment variables.

    Call once at startup and hand the result to `create_app`; handlers read it from
    `app.state.config` rather than the environment.
    """
    environment = (_env_str("APP_ENV") or "development").lower()
    app_url = (_env_str("APP_URL") or "http://localhost:3000").rstrip("/")

    default_level = "info" if environment == "production" else "debug"
    timeout = float(_env_str("OUTBOUND_TIMEOUT_SECONDS") or "10")
    if timeout <= 0:
        timeout = 10.0

    return AppConfig(
        session_secret=_env_str("SESSION_SECRET"),
        app_url=app_url,
        steam_api_key=_env_str("STEAM_API_KEY"),
        environment=environment,
        host=_env_str("HOST") or "0.0.0.0",
        port=_env_int("PORT", 3000),
        log_level=(_env_str("LOG_LEVEL") or default_level).lower(),
        inventory_app_id=_env_int("INVENTORY_APP_ID", 730),
        inventory_context_id=_env_int("INVENTORY_CONTEXT_ID", 2),
        inventory_count=_env_int("INVENTORY_COUNT", 2000),
        outbound_timeout_seconds=timeout,
    )
