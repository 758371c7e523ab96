"""Auth service configuration."""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables."""

    identity_provider: Literal["mock", "supabase"] = "supabase"
    supabase_url: str | None = None
    supabase_key: str | None = None
    provider_timeout_seconds: float | None = 10.0
    host: str = "0.0.0.0"
    port: int = 5002
    log_level: str = "INFO"
    cors_origins: list[str] = ["*"]

    model_config = SettingsConfigDict(env_prefix="AUTHGATE_CORE_", extra="ignore")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
