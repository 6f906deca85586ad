"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"


class Settings(BaseSettings):
    """Application configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING, extra="ignore"
    )

    database_url: str = Field(
        default="sqlite:///./byb.db",
        description="Database connection URL used by SQLAlchemy to connect to the DB",
        min_length=1,
    )
    app_timezone: str | None = Field(
        default=None,
        description="IANA timezone (or UTC±HH:MM offset) used for daily/weekly summaries",
    )
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:5173"],
        description="Origins allowed to call the API from a browser",
    )

    openai_api_key: str | None = Field(
        default=None,
        description="API key for the chat assistant; the assistant answers with a stub when unset",
    )
    openai_base_url: str | None = Field(default=None)
    openai_model: str = Field(default="gpt-4o-mini", min_length=1)
    openai_temperature: float = Field(default=0.4, ge=0, le=2)
    openai_max_output_tokens: int | None = Field(default=500)

    vapid_public_key: str | None = Field(
        default=None,
        description="VAPID application server public key handed to browsers",
    )
    vapid_private_key: str | None = Field(
        default=None,
        description="VAPID private key used to sign Web Push requests",
    )
    vapid_subject: str = Field(
        default="mailto:hello@example.com",
        description="Contact URI placed in the VAPID 'sub' claim",
    )

    push_dispatch_batch_size: int = Field(
        default=100,
        gt=0,
        description="Maximum number of due notifications processed per dispatcher run",
    )
    push_claim_timeout_seconds: int = Field(
        default=600,
        gt=0,
        description="Age after which a 'processing' claim is considered abandoned",
    )
    push_missing_subscription_attempts: int = Field(
        default=3,
        gt=0,
        description="Runs a notification may wait for a device subscription before failing",
    )
    dispatch_token: str | None = Field(
        default=None,
        description="Bearer token required by the dispatch endpoint when set",
    )

    @model_validator(mode="after")
    def _validate_vapid_pair(self) -> "Settings":
        if bool(self.vapid_public_key) ^ bool(self.vapid_private_key):
            raise ValueError(
                "VAPID_PUBLIC_KEY and VAPID_PRIVATE_KEY must both be provided to enable push"
            )
        if not self.vapid_subject.startswith(("mailto:", "https://")):
            raise ValueError("VAPID_SUBJECT must be a mailto: or https:// URI")
        return self

    @property
    def push_enabled(self) -> bool:
        return bool(self.vapid_public_key and self.vapid_private_key)


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
