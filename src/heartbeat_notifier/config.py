"""Configuration management service with Pydantic Settings.

This module loads the notifier's webhook options and runtime settings
from environment variables (and an optional ``.env`` file) at startup.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Literal

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from heartbeat_notifier.models import DEFAULT_ICON_EMOJI, NotificationConfig


class WebhookSettings(BaseSettings):
    """Webhook notification settings."""

    model_config = SettingsConfigDict(env_prefix="NOTIFIER_")

    webhook_url: SecretStr | None = Field(
        default=None,
        alias="NOTIFIER_WEBHOOK_URL",
        description="Incoming webhook URL",
    )
    channel: str = Field(
        default="",
        alias="NOTIFIER_CHANNEL",
        description="Channel to post to, e.g. #ops",
    )
    username: str = Field(
        default="",
        alias="NOTIFIER_USERNAME",
        description="Sender display name",
    )
    icon_emoji: str = Field(
        default=DEFAULT_ICON_EMOJI,
        alias="NOTIFIER_ICON_EMOJI",
        description="Sender icon emoji",
    )
    channel_notify_all: bool = Field(
        default=False,
        alias="NOTIFIER_CHANNEL_NOTIFY_ALL",
        description="Mention the whole channel",
    )
    rich_message: bool = Field(
        default=False,
        alias="NOTIFIER_RICH_MESSAGE",
        description="Send structured messages instead of plain text",
    )
    legacy_button_url: str | None = Field(
        default=None,
        alias="NOTIFIER_LEGACY_BUTTON_URL",
        description="Deprecated button URL, migrated to PRIMARY_BASE_URL",
    )
    timeout: float = Field(
        default=10.0,
        alias="NOTIFIER_TIMEOUT",
        description="HTTP request timeout in seconds",
        gt=0,
    )

    @field_validator("webhook_url")
    @classmethod
    def validate_webhook_url(cls, v: SecretStr | None) -> SecretStr | None:
        """Validate webhook URL format."""
        if v is None:
            return v
        if not v.get_secret_value().startswith(("http://", "https://")):
            raise ValueError("Webhook URL must be an HTTP(S) endpoint")
        return v

    @property
    def enabled(self) -> bool:
        """Check if webhook notifications are configured."""
        return self.webhook_url is not None and bool(self.channel)

    def to_notification_config(self) -> NotificationConfig:
        """Build the per-notification options from these settings."""
        return NotificationConfig(
            webhook_url=self.webhook_url.get_secret_value() if self.webhook_url else "",
            channel=self.channel,
            username=self.username,
            icon_emoji=self.icon_emoji,
            channel_notify_all=self.channel_notify_all,
            rich_message=self.rich_message,
            legacy_button_url=self.legacy_button_url,
        )


class RedisSettings(BaseSettings):
    """Redis connection settings for the shared settings store."""

    model_config = SettingsConfigDict(env_prefix="")

    url: str | None = Field(
        default=None,
        alias="REDIS_URL",
        description="Redis connection string; unset keeps settings in memory",
    )

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str | None) -> str | None:
        """Validate Redis URL format."""
        if v is None:
            return v
        if not v.startswith("redis://"):
            raise ValueError("REDIS_URL must start with redis://")
        return v

    @property
    def enabled(self) -> bool:
        """Check if a Redis settings store is configured."""
        return self.url is not None


class Settings(BaseSettings):
    """Main application settings.

    Example:
        ```python
        from heartbeat_notifier.config import get_settings

        settings = get_settings()
        print(settings.webhook.channel)
        print(settings.log_level)
        ```
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    webhook: WebhookSettings = Field(default_factory=WebhookSettings)
    redis: RedisSettings = Field(default_factory=RedisSettings)

    primary_base_url: str | None = Field(
        default=None,
        alias="PRIMARY_BASE_URL",
        description="Dashboard base URL used for monitor links",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        alias="LOG_LEVEL",
        description="Logging level",
    )
    dry_run: bool = Field(
        default=False,
        alias="DRY_RUN",
        description="Render notifications without sending them",
    )

    @field_validator("primary_base_url")
    @classmethod
    def validate_base_url(cls, v: str | None) -> str | None:
        """Validate base URL format."""
        if v is None:
            return v
        if not v.startswith(("http://", "https://")):
            raise ValueError("PRIMARY_BASE_URL must be an HTTP(S) URL")
        return v

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
            "webhook_url": "(set)" if self.webhook.webhook_url else "(not set)",
            "channel": self.webhook.channel or "(not set)",
            "username": self.webhook.username or "(not set)",
            "rich_message": str(self.webhook.rich_message),
            "primary_base_url": self.primary_base_url or "(not set)",
            "redis_url": self._redact_url(self.redis.url) if self.redis.url else "(not set)",
            "log_level": self.log_level,
            "dry_run": str(self.dry_run),
        }

    @staticmethod
    def _redact_url(url: str) -> str:
        """Redact password from URL if present."""
        if "@" in url and "://" in url:
            protocol_end = url.index("://") + 3
            at_pos = url.index("@")
            creds_part = url[protocol_end:at_pos]
            if ":" in creds_part:
                username = creds_part.split(":")[0]
                return f"{url[:protocol_end]}{username}:***@{url[at_pos + 1 :]}"
        return url


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the application settings singleton.

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
