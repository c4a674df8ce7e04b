"""Alerting layer - validation and webhook delivery."""

from heartbeat_notifier.alerter.dispatcher import (
    SUCCESS_MESSAGE,
    AlertDispatcher,
    validate_config,
)
from heartbeat_notifier.alerter.migration import migrate_legacy_base_url
from heartbeat_notifier.alerter.transport import Transport, WebhookTransport

__all__ = [
    "SUCCESS_MESSAGE",
    "AlertDispatcher",
    "Transport",
    "WebhookTransport",
    "migrate_legacy_base_url",
    "validate_config",
]
