"""Storage layer - settings persistence."""

from heartbeat_notifier.storage.settings_store import (
    PRIMARY_BASE_URL_KEY,
    InMemorySettingsStore,
    RedisSettingsStore,
    SettingsStore,
)

__all__ = [
    "PRIMARY_BASE_URL_KEY",
    "InMemorySettingsStore",
    "RedisSettingsStore",
    "SettingsStore",
]
