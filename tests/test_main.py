"""Tests for the CLI entry point."""

from __future__ import annotations

import json
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from heartbeat_notifier.__main__ import (
    EXIT_CONFIG_ERROR,
    EXIT_ERROR,
    EXIT_SUCCESS,
    build_notification,
    configure_logging,
    create_parser,
    create_settings_store,
    main,
    run_config_check,
    validate_config,
)
from heartbeat_notifier.config import clear_settings_cache
from heartbeat_notifier.errors import DeliveryError
from heartbeat_notifier.models import MonitorStatus
from heartbeat_notifier.storage.settings_store import (
    PRIMARY_BASE_URL_KEY,
    InMemorySettingsStore,
    RedisSettingsStore,
)

ENV_KEYS = (
    "NOTIFIER_WEBHOOK_URL",
    "NOTIFIER_CHANNEL",
    "NOTIFIER_USERNAME",
    "NOTIFIER_RICH_MESSAGE",
    "NOTIFIER_LEGACY_BUTTON_URL",
    "PRIMARY_BASE_URL",
    "REDIS_URL",
    "LOG_LEVEL",
    "DRY_RUN",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Start every test from an empty notifier environment."""
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def webhook_env(monkeypatch):
    """Configure a complete webhook."""
    monkeypatch.setenv("NOTIFIER_WEBHOOK_URL", "https://hooks.example.com/x")
    monkeypatch.setenv("NOTIFIER_CHANNEL", "#ops")
    monkeypatch.setenv("NOTIFIER_USERNAME", "bot")


@pytest.fixture
def mock_transport():
    """Patch the webhook transport used by the CLI."""
    with patch("heartbeat_notifier.__main__.WebhookTransport") as mock_class:
        transport = MagicMock()
        transport.post = AsyncMock(return_value="ok")
        mock_class.return_value = transport
        yield transport


class TestCreateParser:
    """Tests for argument parser creation."""

    def test_parser_has_version(self):
        """Parser should have version flag."""
        parser = create_parser()
        with pytest.raises(SystemExit) as exc_info:
            parser.parse_args(["--version"])
        assert exc_info.value.code == 0

    def test_parser_config_check(self):
        """Parser should accept --config-check flag."""
        args = create_parser().parse_args(["--config-check"])
        assert args.config_check is True

    def test_parser_status(self):
        """Parser should accept known statuses only."""
        parser = create_parser()
        assert parser.parse_args(["--status", "down"]).status == "down"
        with pytest.raises(SystemExit):
            parser.parse_args(["--status", "sideways"])

    def test_parser_default_values(self):
        """Parser should have correct defaults."""
        args = create_parser().parse_args([])
        assert args.config_check is False
        assert args.log_level is None
        assert args.dry_run is False
        assert args.migrate_legacy_url is False
        assert args.status == "test"
        assert args.monitor_name is None
        assert args.timezone == "UTC"


class TestConfigureLogging:
    """Tests for logging configuration."""

    def test_configure_logging_info(self):
        """Should configure logging at INFO level."""
        configure_logging("INFO")
        import logging

        assert logging.getLogger().level == logging.INFO

    def test_configure_logging_quiets_httpx(self):
        """Should keep HTTP client logging at WARNING."""
        configure_logging("DEBUG")
        import logging

        assert logging.getLogger().level == logging.DEBUG
        assert logging.getLogger("httpx").level == logging.WARNING


class TestValidateConfig:
    """Tests for configuration validation."""

    def test_validate_config_success(self):
        """Should return settings on valid config."""
        assert validate_config() is not None

    def test_validate_config_failure(self, monkeypatch, capsys):
        """Should return None on invalid config."""
        monkeypatch.setenv("LOG_LEVEL", "LOUD")

        assert validate_config() is None

        captured = capsys.readouterr()
        assert "Configuration validation failed" in captured.err


class TestRunConfigCheck:
    """Tests for config check mode."""

    def test_config_check_configured(self, webhook_env, capsys):
        """Config check should succeed with a configured webhook."""
        settings = validate_config()
        assert settings is not None

        assert run_config_check(settings) == EXIT_SUCCESS

        captured = capsys.readouterr()
        assert "Configuration:" in captured.out
        assert "Webhook: configured" in captured.out
        assert "hooks.example.com" not in captured.out

    def test_config_check_unconfigured(self, capsys):
        """Config check should fail without a webhook."""
        settings = validate_config()
        assert settings is not None

        assert run_config_check(settings) == EXIT_CONFIG_ERROR
        assert "not configured" in capsys.readouterr().out


class TestCreateSettingsStore:
    """Tests for settings store selection."""

    @pytest.mark.asyncio
    async def test_in_memory_seeded(self, monkeypatch):
        """Should seed the in-memory store with PRIMARY_BASE_URL."""
        monkeypatch.setenv("PRIMARY_BASE_URL", "https://status.example.com")
        settings = validate_config()

        store = create_settings_store(settings)

        assert isinstance(store, InMemorySettingsStore)
        assert await store.get(PRIMARY_BASE_URL_KEY) == "https://status.example.com"

    def test_redis(self, monkeypatch):
        """Should use Redis when REDIS_URL is set."""
        monkeypatch.setenv("REDIS_URL", "redis://localhost:6379")
        settings = validate_config()

        with patch("redis.asyncio.Redis.from_url") as mock_from_url:
            store = create_settings_store(settings)

        assert isinstance(store, RedisSettingsStore)
        mock_from_url.assert_called_once_with("redis://localhost:6379")


class TestBuildNotification:
    """Tests for building the CLI notification."""

    def test_without_monitor(self):
        """No monitor name means no descriptor."""
        args = create_parser().parse_args(["--status", "up"])

        monitor, event = build_notification(args)

        assert monitor is None
        assert event.status is MonitorStatus.UP
        assert event.timezone == "UTC"

    def test_with_monitor(self):
        """Monitor name and URL build an http descriptor."""
        args = create_parser().parse_args(
            ["--monitor-name", "API", "--monitor-url", "https://api.example.com"]
        )

        monitor, _ = build_notification(args)

        assert monitor is not None
        assert monitor.name == "API"
        assert monitor.type == "http"
        assert monitor.address == "https://api.example.com"


class TestMain:
    """Tests for main entry point."""

    def test_main_with_config_check(self, webhook_env):
        """Main should exit successfully with --config-check."""
        with pytest.raises(SystemExit) as exc_info:
            main(["--config-check"])

        assert exc_info.value.code == EXIT_SUCCESS

    def test_main_with_invalid_config(self, monkeypatch):
        """Main should exit with config error on invalid config."""
        monkeypatch.setenv("LOG_LEVEL", "LOUD")

        with pytest.raises(SystemExit) as exc_info:
            main([])

        assert exc_info.value.code == EXIT_CONFIG_ERROR

    def test_main_dry_run_prints_payload(self, webhook_env, monkeypatch, capsys, mock_transport):
        """Dry run should print the JSON payload and send nothing."""
        monkeypatch.setenv("NOTIFIER_RICH_MESSAGE", "true")

        with pytest.raises(SystemExit) as exc_info:
            main(["--dry-run", "--status", "down", "--monitor-name", "API"])

        assert exc_info.value.code == EXIT_SUCCESS
        payload = json.loads(capsys.readouterr().out)
        assert payload["channel"] == "#ops"
        assert payload["text"] == "🔴 API went down!"
        assert len(payload["attachments"]) == 1
        mock_transport.post.assert_not_called()

    def test_main_dry_run_incomplete_config(self, capsys):
        """Dry run should still validate the notification config."""
        with pytest.raises(SystemExit) as exc_info:
            main(["--dry-run"])

        assert exc_info.value.code == EXIT_CONFIG_ERROR
        assert "invalid" in capsys.readouterr().err

    def test_main_sends(self, webhook_env, capsys, mock_transport):
        """Main should deliver the notification."""
        with pytest.raises(SystemExit) as exc_info:
            main(["--message", "hello"])

        assert exc_info.value.code == EXIT_SUCCESS
        assert "Sent Successfully." in capsys.readouterr().out
        mock_transport.post.assert_awaited_once()
        url, payload = mock_transport.post.call_args.args
        assert url == "https://hooks.example.com/x"
        assert "hello" in payload["text"]

    def test_main_delivery_failure(self, webhook_env, mock_transport):
        """Main should exit with an error when delivery fails."""
        mock_transport.post.side_effect = DeliveryError("boom", status_code=500)

        with pytest.raises(SystemExit) as exc_info:
            main([])

        assert exc_info.value.code == EXIT_ERROR

    def test_main_migration(self, monkeypatch, capsys):
        """Main should run the legacy URL migration."""
        monkeypatch.setenv("NOTIFIER_LEGACY_BUTTON_URL", "https://old.example.com")

        with pytest.raises(SystemExit) as exc_info:
            main(["--migrate-legacy-url"])

        assert exc_info.value.code == EXIT_SUCCESS
        assert "Migrated legacy button URL." in capsys.readouterr().out

    def test_main_migration_already_set(self, monkeypatch, capsys):
        """Main should leave an existing base URL alone."""
        monkeypatch.setenv("NOTIFIER_LEGACY_BUTTON_URL", "https://old.example.com")
        monkeypatch.setenv("PRIMARY_BASE_URL", "https://status.example.com")

        with pytest.raises(SystemExit) as exc_info:
            main(["--migrate-legacy-url"])

        assert exc_info.value.code == EXIT_SUCCESS
        assert "already set" in capsys.readouterr().out

    @patch("heartbeat_notifier.__main__.asyncio.run")
    def test_main_interrupted(self, mock_asyncio_run, webhook_env):
        """Main should exit with 130 on Ctrl-C."""
        mock_asyncio_run.side_effect = KeyboardInterrupt

        with pytest.raises(SystemExit) as exc_info:
            main([])

        assert exc_info.value.code == 130


class TestIntegration:
    """Integration tests for CLI invocation."""

    def test_cli_help_option(self, capsys):
        """CLI should display help with -h option."""
        with pytest.raises(SystemExit) as exc_info:
            main(["-h"])

        assert exc_info.value.code == 0
        captured = capsys.readouterr()
        assert "heartbeat-notifier" in captured.out
        assert "--config-check" in captured.out
        assert "--dry-run" in captured.out
        assert "--migrate-legacy-url" in captured.out

    def test_cli_version_option(self, capsys):
        """CLI should display version with --version option."""
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])

        assert exc_info.value.code == 0
        assert "0.1.0" in capsys.readouterr().out

    def test_cli_invalid_log_level(self, capsys):
        """CLI should reject invalid log level."""
        with pytest.raises(SystemExit) as exc_info:
            main(["--log-level", "INVALID"])

        assert exc_info.value.code != 0
        assert "invalid choice" in capsys.readouterr().err
