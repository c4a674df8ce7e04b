"""Alert dispatcher: validate, assemble and deliver one notification."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from heartbeat_notifier.alerter.migration import migrate_legacy_base_url
from heartbeat_notifier.alerter.transport import Transport, WebhookTransport
from heartbeat_notifier.errors import ConfigurationError, DeliveryError, MigrationError
from heartbeat_notifier.formatter.assembler import MessageAssembler
from heartbeat_notifier.storage.settings_store import (
    PRIMARY_BASE_URL_KEY,
    InMemorySettingsStore,
    SettingsStore,
)

if TYPE_CHECKING:
    from heartbeat_notifier.models import (
        MonitorDescriptor,
        MonitorEvent,
        NotificationConfig,
        RenderedMessage,
    )

SUCCESS_MESSAGE = "Sent Successfully."
CHANNEL_MENTION = "<!channel>"

REQUIRED_FIELDS: tuple[tuple[str, str], ...] = (
    ("webhook_url", "Webhook URL is required for notifications."),
    ("channel", "Channel is required for notifications."),
    ("username", "Username is required for notifications."),
)


def validate_config(config: NotificationConfig) -> None:
    """Check that every required notification field is a non-empty string.

    Raises:
        ConfigurationError: Naming the first missing field.
    """
    for field_name, message in REQUIRED_FIELDS:
        value = getattr(config, field_name, None)
        if not isinstance(value, str) or not value.strip():
            raise ConfigurationError(message)


class AlertDispatcher:
    """Sends heartbeat notifications to a webhook.

    Each call validates the configuration, assembles the message and
    makes a single delivery attempt.
    """

    def __init__(
        self,
        *,
        settings_store: SettingsStore | None = None,
        transport: Transport | None = None,
        assembler: MessageAssembler | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        """Initialize the dispatcher.

        Args:
            settings_store: Source of the dashboard base URL.
            transport: Outbound HTTP boundary.
            assembler: Message assembler.
            logger: Logger for dispatch events. Defaults to the module logger.
        """
        self._log = logger or logging.getLogger(__name__)
        self.settings_store = settings_store or InMemorySettingsStore()
        self.transport = transport or WebhookTransport()
        self.assembler = assembler or MessageAssembler(logger=self._log)

    async def render(
        self,
        config: NotificationConfig,
        text: str,
        monitor: MonitorDescriptor | None = None,
        event: MonitorEvent | None = None,
    ) -> RenderedMessage:
        """Validate and assemble a notification without delivering it.

        Raises:
            ConfigurationError: If the configuration is incomplete.
        """
        try:
            validate_config(config)
        except ConfigurationError as e:
            self._log.error(f"Notification configuration error: {e}")
            raise

        if config.channel_notify_all:
            text = f"{text} {CHANNEL_MENTION}"
            self._log.debug("Channel notification tag appended")

        base_url = await self.settings_store.get(PRIMARY_BASE_URL_KEY)
        return self.assembler.assemble(config, text, monitor, event, base_url)

    async def send(
        self,
        config: NotificationConfig,
        text: str,
        monitor: MonitorDescriptor | None = None,
        event: MonitorEvent | None = None,
    ) -> str:
        """Format and deliver one notification.

        Args:
            config: Notification options.
            text: Notification text.
            monitor: Monitor the event belongs to, if any.
            event: Heartbeat being reported, if any.

        Returns:
            ``SUCCESS_MESSAGE``.

        Raises:
            ConfigurationError: If the configuration is incomplete. Nothing is sent.
            DeliveryError: If the webhook call fails.
        """
        message = await self.render(config, text, monitor, event)

        if config.legacy_button_url:
            try:
                await migrate_legacy_base_url(self.settings_store, config.legacy_button_url)
            except MigrationError as e:
                self._log.warning(f"Legacy button URL migration skipped: {e}")

        try:
            response = await self.transport.post(config.webhook_url, message.to_payload())
        except DeliveryError:
            self._log.error(f"Notification delivery to channel {config.channel} failed")
            raise
        except Exception as e:
            self._log.error(f"Notification delivery to channel {config.channel} failed: {e}")
            raise DeliveryError(f"Notification delivery failed: {e}") from e

        self._log.info(f"Notification sent to {config.channel}: {response!r}")
        return SUCCESS_MESSAGE
