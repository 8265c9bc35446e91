# meeting_join/core/config.py
from functools import lru_cache

from pydantic import AnyHttpUrl, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Global application configuration.

    Values are loaded from environment variables at runtime.

    These settings are used for:
    - Logging level of the HTTP service
    - The public home URL used to build shareable meeting links
    - Early-join defaults and the accepted early-join range
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    APP_NAME: str = "Meeting Join Service"
    APP_ENV: str = Field("local", description="Environment name: local/dev/stage/prod")
    LOG_LEVEL: str = Field("INFO", description="Root logging level for the service.")

    HOME_URL: AnyHttpUrl = Field(
        "https://app.example.org",
        description="Public base URL of the portal, used for meeting detail links.",
    )

    DEFAULT_EARLY_JOIN_MINUTES: int = Field(
        default=10,
        description="Early-join window applied when a meeting does not set one.",
    )
    MIN_EARLY_JOIN_MINUTES: int = Field(
        default=10,
        description="Smallest early-join window accepted on incoming meetings.",
    )
    MAX_EARLY_JOIN_MINUTES: int = Field(
        default=60,
        description="Largest early-join window accepted on incoming meetings.",
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Cached accessor for application settings.

    Using LRU cache ensures settings are read and validated only once,
    while still being easily importable across the app.
    """
    return Settings()
