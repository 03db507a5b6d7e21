"""Environment-driven configuration."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from ``ACCOUNT_STATE_*`` environment variables."""

    service_url: str = "https://localhost"
    service_token: str = ""
    service_timeout_seconds: float = 30.0
    service_retries: int = 1
    runtime_environment: str = "development"
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="ACCOUNT_STATE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    """Return cached settings."""
    return Settings()


def validate_settings(settings: Settings) -> None:
    if not settings.service_url.startswith(("http://", "https://")):
        raise ValueError("Invalid configuration: service url must be http(s)")
    if settings.service_timeout_seconds <= 0:
        raise ValueError("Invalid configuration: service timeout must be > 0")
    if settings.service_retries < 0:
        raise ValueError("Invalid configuration: service retries must be >= 0")
