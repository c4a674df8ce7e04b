"""One-time migration of the legacy button URL into the primary base URL."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from heartbeat_notifier.errors import MigrationError
from heartbeat_notifier.storage.settings_store import PRIMARY_BASE_URL_KEY

if TYPE_CHECKING:
    from heartbeat_notifier.storage.settings_store import SettingsStore

logger = logging.getLogger(__name__)

GENERAL_SETTINGS_GROUP = "general"


async def migrate_legacy_base_url(store: SettingsStore, url: str) -> bool:
    """Adopt a legacy button URL as the primary base URL if none is set.

    Idempotent: once a primary base URL exists this is a no-op.

    Args:
        store: Settings store holding the primary base URL.
        url: Deprecated button URL from a notification record.

    Returns:
        True if the URL was written, False if a primary base URL already existed.

    Raises:
        MigrationError: If reading or writing the settings store fails.
    """
    try:
        current = await store.get(PRIMARY_BASE_URL_KEY)
        if current:
            logger.debug(f"Primary base URL already set to {current}, no migration needed")
            return False

        await store.set_many(GENERAL_SETTINGS_GROUP, {PRIMARY_BASE_URL_KEY: url})
    except Exception as e:
        logger.error(f"Failed to migrate legacy URL {url}: {e}")
        raise MigrationError(f"Migration failed: {e}") from e

    logger.info(f"Migrated legacy button URL to primary base URL: {url}")
    return True
