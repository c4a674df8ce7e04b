"""CLI entry point for Heartbeat Notifier.

Sends a single notification using the configured webhook, which is handy
for checking a channel setup end to end.

Usage:
    python -m heartbeat_notifier [options]
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import logging.config
import sys
from datetime import UTC, datetime
from typing import NoReturn

from pydantic import ValidationError

from heartbeat_notifier import __version__
from heartbeat_notifier.alerter.dispatcher import AlertDispatcher
from heartbeat_notifier.alerter.migration import migrate_legacy_base_url
from heartbeat_notifier.alerter.transport import WebhookTransport
from heartbeat_notifier.config import Settings, clear_settings_cache, get_settings
from heartbeat_notifier.errors import ConfigurationError, DeliveryError, MigrationError
from heartbeat_notifier.models import MonitorDescriptor, MonitorEvent, MonitorStatus
from heartbeat_notifier.storage.settings_store import (
    PRIMARY_BASE_URL_KEY,
    InMemorySettingsStore,
    RedisSettingsStore,
    SettingsStore,
)

APP_NAME = "Heartbeat Notifier"
APP_VERSION = __version__

# Exit codes
EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_CONFIG_ERROR = 2
EXIT_INTERRUPTED = 130

STATUS_CHOICES = {
    "down": MonitorStatus.DOWN,
    "up": MonitorStatus.UP,
    "pending": MonitorStatus.PENDING,
    "maintenance": MonitorStatus.MAINTENANCE,
    "certificate": MonitorStatus.CERTIFICATE_WARNING,
    "test": MonitorStatus.TEST,
    "report": MonitorStatus.REPORT,
}


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI.

    Returns:
        Configured ArgumentParser instance.
    """
    parser = argparse.ArgumentParser(
        prog="heartbeat-notifier",
        description="Send a monitor status notification to a chat webhook.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m heartbeat_notifier                         Send a test notification
  python -m heartbeat_notifier --config-check          Validate config and exit
  python -m heartbeat_notifier --dry-run --status down Print the payload only
  python -m heartbeat_notifier --migrate-legacy-url    Run the base URL migration
        """,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {APP_VERSION}",
    )
    parser.add_argument(
        "--config-check",
        action="store_true",
        help="Validate configuration and exit",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
        help="Override logging level (default: from settings)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the payload instead of sending it",
    )
    parser.add_argument(
        "--migrate-legacy-url",
        action="store_true",
        help="Move the legacy button URL into the primary base URL and exit",
    )
    parser.add_argument(
        "--status",
        choices=sorted(STATUS_CHOICES),
        default="test",
        help="Status to report (default: test)",
    )
    parser.add_argument(
        "--monitor-name",
        default=None,
        help="Monitor name (default: no monitor, fallback descriptor is used)",
    )
    parser.add_argument(
        "--monitor-url",
        default=None,
        help="Address of the monitored resource",
    )
    parser.add_argument(
        "--timezone",
        default="UTC",
        help="IANA timezone for the event time (default: UTC)",
    )
    parser.add_argument(
        "--message",
        default="Test notification",
        help="Notification text",
    )

    return parser


def configure_logging(level: str) -> None:
    """Configure logging for the application.

    Args:
        level: Logging level string (DEBUG, INFO, etc.)
    """
    config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {
                "format": "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
            "detailed": {
                "format": (
                    "%(asctime)s [%(levelname)s] %(name)s (%(filename)s:%(lineno)d): %(message)s"
                ),
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": level,
                "formatter": "detailed" if level == "DEBUG" else "standard",
                "stream": "ext://sys.stderr",
            },
        },
        "root": {
            "level": level,
            "handlers": ["console"],
        },
        # Quieter logging for noisy libraries
        "loggers": {
            "httpx": {"level": "WARNING"},
            "httpcore": {"level": "WARNING"},
            "redis": {"level": "WARNING"},
        },
    }
    logging.config.dictConfig(config)


def validate_config() -> Settings | None:
    """Validate and load configuration.

    Returns:
        Settings instance if valid, None if invalid.
    """
    try:
        clear_settings_cache()
        return get_settings()
    except ValidationError as e:
        print("Configuration validation failed:", file=sys.stderr)
        for error in e.errors():
            field = ".".join(str(loc) for loc in error["loc"])
            msg = error["msg"]
            print(f"  {field}: {msg}", file=sys.stderr)
        return None


def run_config_check(settings: Settings) -> int:
    """Print the configuration summary.

    Args:
        settings: Validated settings.

    Returns:
        Exit code (0 if the webhook is configured).
    """
    summary = settings.redacted_summary()
    print("Configuration:")
    for key, value in summary.items():
        print(f"  {key}: {value}")
    print()

    if not settings.webhook.enabled:
        print("Webhook: not configured (set NOTIFIER_WEBHOOK_URL and NOTIFIER_CHANNEL)")
        return EXIT_CONFIG_ERROR

    print("Webhook: configured")
    return EXIT_SUCCESS


def create_settings_store(settings: Settings) -> SettingsStore:
    """Create the settings store selected by the configuration."""
    if settings.redis.url:
        from redis.asyncio import Redis

        return RedisSettingsStore(Redis.from_url(settings.redis.url))

    initial: dict[str, str] = {}
    if settings.primary_base_url:
        initial[PRIMARY_BASE_URL_KEY] = settings.primary_base_url
    return InMemorySettingsStore(initial)


def build_notification(
    args: argparse.Namespace,
) -> tuple[MonitorDescriptor | None, MonitorEvent]:
    """Build the monitor and event described by the command line."""
    monitor = None
    if args.monitor_name:
        monitor = MonitorDescriptor(
            name=args.monitor_name,
            type="http" if args.monitor_url else None,
            address=args.monitor_url,
        )

    event = MonitorEvent(
        status=STATUS_CHOICES[args.status],
        message=args.message,
        local_date_time=datetime.now(UTC),
        timezone=args.timezone,
    )
    return monitor, event


async def run_migration(settings: Settings, store: SettingsStore) -> int:
    """Run the legacy button URL migration as a standalone step."""
    url = settings.webhook.legacy_button_url
    if not url:
        print("No legacy button URL configured, nothing to migrate.")
        return EXIT_SUCCESS

    try:
        migrated = await migrate_legacy_base_url(store, url)
    except MigrationError as e:
        print(f"Migration failed: {e}", file=sys.stderr)
        return EXIT_ERROR

    print("Migrated legacy button URL." if migrated else "Primary base URL already set.")
    return EXIT_SUCCESS


async def run_send(
    settings: Settings,
    store: SettingsStore,
    args: argparse.Namespace,
    dry_run: bool,
) -> int:
    """Send (or print) one notification.

    Returns:
        Exit code.
    """
    logger = logging.getLogger(__name__)
    dispatcher = AlertDispatcher(
        settings_store=store,
        transport=WebhookTransport(timeout=settings.webhook.timeout),
    )
    config = settings.webhook.to_notification_config()
    monitor, event = build_notification(args)

    try:
        if dry_run:
            message = await dispatcher.render(config, args.message, monitor, event)
            print(json.dumps(message.to_payload(), indent=2, ensure_ascii=False))
            return EXIT_SUCCESS

        result = await dispatcher.send(config, args.message, monitor, event)
    except ConfigurationError as e:
        print(f"Notification configuration is invalid: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR
    except DeliveryError as e:
        logger.error("Notification failed: %s", e)
        return EXIT_ERROR

    print(result)
    return EXIT_SUCCESS


def main(argv: list[str] | None = None) -> NoReturn:
    """Main entry point for the CLI.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:]).
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    settings = validate_config()
    if settings is None:
        sys.exit(EXIT_CONFIG_ERROR)

    configure_logging(args.log_level or settings.log_level)

    if args.config_check:
        sys.exit(run_config_check(settings))

    store = create_settings_store(settings)
    try:
        if args.migrate_legacy_url:
            exit_code = asyncio.run(run_migration(settings, store))
        else:
            dry_run = args.dry_run or settings.dry_run
            exit_code = asyncio.run(run_send(settings, store, args, dry_run))
    except KeyboardInterrupt:
        exit_code = EXIT_INTERRUPTED

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
