"""Configuration management service with Pydantic Settings.

This module provides centralized configuration for the Crashlytics Teams
Notifier, loading and validating environment variables. The Teams webhook
URL is a secret: it is held as a SecretStr and never logged.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Literal

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from crashlytics_teams_notifier.notifier.errors import WebhookNotConfiguredError


class TeamsSettings(BaseSettings):
    """Microsoft Teams notification settings."""

    model_config = SettingsConfigDict(
        env_prefix="TEAMS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    webhook_url: SecretStr | None = Field(
        default=None,
        alias="TEAMS_WEBHOOK_URL",
        description="Teams incoming webhook URL for alerts",
    )

    @field_validator("webhook_url")
    @classmethod
    def validate_webhook_url(cls, v: SecretStr | None) -> SecretStr | None:
        """Validate webhook URL format."""
        if v is None:
            return v
        if not v.get_secret_value().startswith("https://"):
            raise ValueError("TEAMS_WEBHOOK_URL must be an https:// URL")
        return v

    @property
    def enabled(self) -> bool:
        """Check if Teams notifications are enabled."""
        return self.webhook_url is not None


class Settings(BaseSettings):
    """Main application settings.

    Loads configuration from environment variables with support for
    .env files via python-dotenv.

    Example:
        ```python
        from crashlytics_teams_notifier.config import get_settings

        settings = get_settings()
        print(settings.teams.enabled)
        print(settings.log_level)
        ```
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    teams: TeamsSettings = Field(default_factory=TeamsSettings)

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        alias="LOG_LEVEL",
        description="Logging level",
    )
    dry_run: bool = Field(
        default=False,
        alias="DRY_RUN",
        description="Build cards without sending them",
    )

    def get_logging_level(self) -> int:
        """Get the numeric logging level."""
        level: int = getattr(logging, self.log_level)
        return level

    def redacted_summary(self) -> dict[str, str]:
        """Get a summary of settings with secrets redacted.

        Returns:
            Dictionary of settings with sensitive values masked.
        """
        return {
            "teams_webhook_url": "(set)" if self.teams.webhook_url else "(not set)",
            "log_level": self.log_level,
            "dry_run": str(self.dry_run),
        }


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the application settings singleton.

    Uses LRU cache to ensure settings are loaded only once and
    reused across the application.

    Returns:
        The Settings instance.

    Raises:
        ValidationError: If environment variables have invalid values.
    """
    return Settings()


def clear_settings_cache() -> None:
    """Clear the settings cache.

    Useful for testing when you need to reload settings with
    different environment variables.
    """
    get_settings.cache_clear()


def teams_webhook_url() -> str:
    """Resolve the Teams webhook URL from settings.

    Intended as the webhook URL provider for TeamsChannel, so the secret is
    looked up at delivery time.

    Raises:
        WebhookNotConfiguredError: If TEAMS_WEBHOOK_URL is not set.
    """
    webhook_url = get_settings().teams.webhook_url
    if webhook_url is None:
        raise WebhookNotConfiguredError("TEAMS_WEBHOOK_URL is not set")
    return webhook_url.get_secret_value()
