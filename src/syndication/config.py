"""
Configuration management for Syndication.

Uses Pydantic for validation and pydantic-settings for environment variable support.
"""

from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseConfig(BaseSettings):
    """Database configuration.

    Either a full SQLAlchemy ``url`` or a SQLite ``path`` may be given.
    When ``url`` is set it wins; otherwise ``path`` is used as a SQLite file
    (``:memory:`` selects an in-memory database).

    Environment variables: DB_URL, DB_PATH, DB_ECHO.
    """

    model_config = SettingsConfigDict(env_prefix="DB_")

    url: str | None = Field(default=None, description="Full SQLAlchemy database URL")
    path: str = Field(default="data/syndication.db", description="Database file path (SQLite)")
    echo: bool = Field(default=False, description="Echo SQL statements")

    @field_validator("path")
    @classmethod
    def ensure_directory_exists(cls, v: str) -> str:
        """Ensure the database directory exists."""
        if v != ":memory:" and not v.startswith("sqlite://"):
            Path(v).parent.mkdir(parents=True, exist_ok=True)
        return v


class FetcherConfig(BaseSettings):
    """RSS/Atom fetcher configuration."""

    model_config = SettingsConfigDict(env_prefix="FETCHER_")

    timeout_seconds: int = Field(default=30, ge=1, le=300, description="Request timeout")
    user_agent: str = Field(
        default="Syndication/0.1.0 (+https://github.com/syndication)",
        description="User-Agent header"
    )
    follow_redirects: bool = Field(default=True)
    max_redirects: int = Field(default=5, ge=0, le=20)


class SyncConfig(BaseSettings):
    """Feed synchronization and scheduling configuration."""

    model_config = SettingsConfigDict(env_prefix="SYNC_")

    enabled: bool = Field(default=True, description="Enable the periodic sync scheduler")
    timezone: str = Field(default="UTC", description="Scheduler timezone")

    interval_minutes: int = Field(default=5, ge=1, description="Minutes between sync-all-users runs")
    staleness_window_seconds: int = Field(
        default=60,
        ge=0,
        description="Minimum seconds after a feed's last update before it is fetched again"
    )
    respect_feed_ttl: bool = Field(
        default=False,
        description="Widen the staleness window to the feed's TTL hint (minutes) when larger"
    )
    max_workers: int = Field(
        default=1, ge=1, le=32,
        description="Concurrent feed syncs per fan-out (1=sequential)"
    )


LOGURU_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")
STDLIB_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class LoggingConfig(BaseSettings):
    """Logging configuration.

    Environment variables: LOG_LEVEL, LOG_FILE_ENABLED, LOG_FILE_PATH, ...
    """

    model_config = SettingsConfigDict(env_prefix="LOG_")

    level: str = Field(default="INFO", description="Level of the syndication sinks")
    third_party_level: str = Field(
        default="WARNING",
        description="Level of the httpx and APScheduler stdlib loggers"
    )
    format: str = Field(
        default="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
        description="Loguru format string"
    )

    console_enabled: bool = Field(default=True, description="Log to stderr")

    file_enabled: bool = Field(default=True, description="Log to a rotating file")
    file_path: str = Field(default="logs/syndication.log", description="Log file path")
    rotation: str = Field(default="10 MB", description="Rotate the file at this size or age")
    retention: str = Field(default="14 days", description="Delete rotated files after this period")

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Normalize and check a loguru level name."""
        v = v.strip().upper()
        if v not in LOGURU_LEVELS:
            raise ValueError(f"Log level must be one of {list(LOGURU_LEVELS)}")
        return v

    @field_validator("third_party_level")
    @classmethod
    def validate_third_party_level(cls, v: str) -> str:
        """Normalize and check a standard library level name."""
        v = v.strip().upper()
        if v not in STDLIB_LEVELS:
            raise ValueError(f"Third party log level must be one of {list(STDLIB_LEVELS)}")
        return v


class Config(BaseSettings):
    """Main application configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="SYNDICATION_",
        case_sensitive=False,
    )

    app_name: str = Field(default="Syndication", description="Application name")
    debug: bool = Field(default=False, description="Debug mode")

    # Sub-configurations
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    fetcher: FetcherConfig = Field(default_factory=FetcherConfig)
    sync: SyncConfig = Field(default_factory=SyncConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


_NESTED_CONFIGS: dict[str, type[BaseSettings]] = {
    "database": DatabaseConfig,
    "fetcher": FetcherConfig,
    "sync": SyncConfig,
    "logging": LoggingConfig,
}

# Global configuration instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = Config()
    return _config


def load_config_from_yaml(yaml_path: str) -> Config:
    """Load configuration from a YAML file.

    Values loaded from YAML take precedence over environment variables.
    Sections missing from the file are still read from the environment.

    Args:
        yaml_path: Path to the YAML configuration file.

    Returns:
        Config instance loaded from the file.
    """
    import yaml

    yaml_file = Path(yaml_path)
    if not yaml_file.exists():
        raise FileNotFoundError(f"Configuration file not found: {yaml_path}")

    with yaml_file.open("r", encoding="utf-8") as f:
        config_dict = yaml.safe_load(f) or {}

    main_config = {}
    for key, value in config_dict.items():
        if key not in _NESTED_CONFIGS:
            main_config[key] = value

    for key, config_class in _NESTED_CONFIGS.items():
        main_config[key] = config_class(**(config_dict.get(key) or {}))

    return Config(**main_config)


def reload_config(yaml_path: str = "config/config.yaml") -> Config:
    """Reload configuration from environment and an optional YAML file."""
    global _config

    if Path(yaml_path).exists():
        _config = load_config_from_yaml(yaml_path)
    else:
        _config = Config()

    return _config
