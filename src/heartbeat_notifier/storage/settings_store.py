"""Process-wide key/value settings used by the notifier.

The dispatcher only needs two operations: read a setting by key and write
a group of settings. ``InMemorySettingsStore`` serves tests and single
process deployments, ``RedisSettingsStore`` shares settings between
processes.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from redis.asyncio import Redis

logger = logging.getLogger(__name__)

PRIMARY_BASE_URL_KEY = "primaryBaseURL"


class SettingsStore(Protocol):
    """Protocol for settings storage backends."""

    async def get(self, key: str) -> str | None:
        """Return the value of a setting, or None if unset."""
        ...

    async def set_many(self, group: str, values: Mapping[str, str]) -> None:
        """Write several settings belonging to ``group``."""
        ...


class InMemorySettingsStore:
    """Settings held in a dictionary for the lifetime of the process."""

    def __init__(self, initial: Mapping[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(initial or {})
        self._groups: dict[str, set[str]] = {}

    async def get(self, key: str) -> str | None:
        return self._values.get(key)

    async def set_many(self, group: str, values: Mapping[str, str]) -> None:
        self._values.update(values)
        self._groups.setdefault(group, set()).update(values)
        logger.debug(f"Stored {len(values)} setting(s) in group {group!r}")

    def group_keys(self, group: str) -> set[str]:
        """Keys written under a group."""
        return set(self._groups.get(group, set()))


class RedisSettingsStore:
    """Settings stored in Redis.

    Each setting is a plain string key; a set per group records which keys
    were written under it.
    """

    KEY_PREFIX_SETTING = "settings:value:"
    KEY_PREFIX_GROUP = "settings:group:"

    def __init__(self, redis: Redis) -> None:
        """Initialize the store.

        Args:
            redis: Redis client (async).
        """
        self.redis = redis

    async def get(self, key: str) -> str | None:
        value = await self.redis.get(f"{self.KEY_PREFIX_SETTING}{key}")
        if value is None:
            return None
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return str(value)

    async def set_many(self, group: str, values: Mapping[str, str]) -> None:
        if not values:
            return

        async with self.redis.pipeline() as pipe:
            for key, value in values.items():
                pipe.set(f"{self.KEY_PREFIX_SETTING}{key}", value)
            pipe.sadd(f"{self.KEY_PREFIX_GROUP}{group}", *values.keys())
            await pipe.execute()

        logger.debug(f"Stored {len(values)} setting(s) in group {group!r}")
