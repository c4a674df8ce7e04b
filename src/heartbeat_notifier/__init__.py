"""Heartbeat Notifier - monitor status alerts rendered for chat webhooks."""

__version__ = "0.1.0"
