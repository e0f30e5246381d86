from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_API_BASE = "https://api.telegram.org"
DEFAULT_FILE_BASE = "https://api.telegram.org/file"


class Settings(BaseSettings):
    """
    Bot settings.

    Values come from environment variables (highest priority), then `.env`,
    then the defaults below.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    telegram_bot_token: str = ""
    telegram_api_base: str = DEFAULT_API_BASE
    telegram_file_base: str = DEFAULT_FILE_BASE
    telegram_webhook_secret: str = ""

    http_timeout: float = 30.0


@lru_cache
def get_settings() -> Settings:
    # Cached settings for process lifetime.
    return Settings()
