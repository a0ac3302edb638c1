"""Unit tests for configuration loading."""

import pytest
from pydantic import ValidationError

import syndication.config as config_module
from syndication.config import (
    Config,
    DatabaseConfig,
    FetcherConfig,
    SyncConfig,
    get_config,
    load_config_from_yaml,
    reload_config,
)


class TestDefaults:
    """Tests for default values."""

    def test_sync_defaults(self):
        config = SyncConfig()

        assert config.staleness_window_seconds == 60
        assert config.interval_minutes == 5
        assert config.respect_feed_ttl is False
        assert config.max_workers == 1
        assert config.timezone == "UTC"
        assert config.enabled is True

    def test_fetcher_defaults(self):
        config = FetcherConfig()

        assert config.timeout_seconds == 30
        assert config.follow_redirects is True
        assert config.user_agent.startswith("Syndication/")

    def test_memory_database_creates_no_directory(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        DatabaseConfig(path=":memory:")

        assert list(tmp_path.iterdir()) == []


class TestEnvironment:
    """Tests for environment variable overrides."""

    def test_sync_env(self, monkeypatch):
        monkeypatch.setenv("SYNC_STALENESS_WINDOW_SECONDS", "120")
        monkeypatch.setenv("SYNC_RESPECT_FEED_TTL", "true")

        config = SyncConfig()

        assert config.staleness_window_seconds == 120
        assert config.respect_feed_ttl is True

    def test_fetcher_env(self, monkeypatch):
        monkeypatch.setenv("FETCHER_TIMEOUT_SECONDS", "10")

        assert FetcherConfig().timeout_seconds == 10

    def test_invalid_value(self, monkeypatch):
        monkeypatch.setenv("SYNC_MAX_WORKERS", "0")

        with pytest.raises(ValidationError):
            SyncConfig()


class TestYamlLoading:
    """Tests for YAML configuration files."""

    def test_load_config_from_yaml(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text(
            "app_name: Test Syndication\n"
            "database:\n"
            "  path: ':memory:'\n"
            "sync:\n"
            "  interval_minutes: 10\n"
            "  max_workers: 4\n"
            "fetcher:\n"
            "  timeout_seconds: 5\n"
        )

        config = load_config_from_yaml(str(config_file))

        assert config.app_name == "Test Syndication"
        assert config.database.path == ":memory:"
        assert config.sync.interval_minutes == 10
        assert config.sync.max_workers == 4
        assert config.sync.staleness_window_seconds == 60
        assert config.fetcher.timeout_seconds == 5

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config_from_yaml(str(tmp_path / "missing.yaml"))

    def test_reload_config_replaces_global(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("database:\n  path: ':memory:'\nsync:\n  interval_minutes: 15\n")

        config = reload_config(str(config_file))

        assert get_config() is config
        assert config.sync.interval_minutes == 15

    def test_reload_config_without_file(self, tmp_path, monkeypatch):
        monkeypatch.setenv("DB_PATH", ":memory:")

        config = reload_config(str(tmp_path / "missing.yaml"))

        assert isinstance(config, Config)
        assert config_module._config is config
