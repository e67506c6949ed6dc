"""
badgermole.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for the web and SSH listeners.
- Hold OTP lifetime / sweep cadence and session cookie parameters.
- Offer a cached settings instance for dependency injection.
"""

from __future__ import annotations

from datetime import timedelta
from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    All knobs are env-driven (prefix `BADGERMOLE_`); defaults are safe for local dev.
    """

    model_config = SettingsConfigDict(env_prefix="BADGERMOLE_", case_sensitive=False)

    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "badgermole"
    log_level: str = "INFO"

    # Web (redemption + session pages)
    web_host: str = "localhost"
    web_port: int = 3000

    # SSH (issuance)
    ssh_enabled: bool = True
    ssh_host: str = "localhost"
    ssh_port: int = 10000
    # Unset means an ephemeral host key is generated at startup.
    ssh_host_key_path: str | None = None

    # OTP
    otp_lifetime_seconds: int = Field(default=60, gt=0)
    sweep_interval_seconds: float = Field(default=60.0, gt=0)

    # Session cookie
    session_cookie_name: str = "authorized"
    session_max_age_seconds: int = Field(default=3600, gt=0)
    session_cookie_secure: bool = True

    @property
    def otp_lifetime(self) -> timedelta:
        return timedelta(seconds=self.otp_lifetime_seconds)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Cache avoids re-parsing env vars for each request dependency.
    return Settings()


# --- Module Notes -----------------------------------------------------------
# The original deployment swept with the same duration it used as the OTP
# lifetime; both are exposed separately here but default to the same value.
