"""
Logging for syndication, built on loguru.

Console and rotating file sinks are configured from ``LoggingConfig``.
httpx and APScheduler log through the standard library; their loggers
are held at ``LoggingConfig.third_party_level`` so per-request and
per-job chatter does not drown the sync log.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

from loguru import logger as _logger

from syndication.config import LoggingConfig, get_config

THIRD_PARTY_LOGGERS = ("httpx", "httpcore", "apscheduler")


def setup_logger(
    level: Optional[str] = None,
    log_file: Optional[str] = None,
    rotation: Optional[str] = None,
    retention: Optional[str] = None,
    format: Optional[str] = None,
    log_config: Optional[LoggingConfig] = None,
) -> list[int]:
    """Replace all loguru sinks with the configured console and file sinks.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, etc.)
        log_file: Path to log file
        rotation: Log rotation setting (e.g., "100 MB", "1 day")
        retention: Log retention setting (e.g., "30 days", "1 week")
        format: Log format string
        log_config: Logging section to use instead of the global config

    Returns:
        IDs of the sinks that were added
    """
    log_config = log_config or get_config().logging
    level = level or log_config.level
    format = format or log_config.format

    _logger.remove()
    handler_ids = []

    if log_config.console_enabled:
        handler_ids.append(_add_console_sink(level, format))

    if log_config.file_enabled:
        handler_ids.append(
            _add_file_sink(
                Path(log_file or log_config.file_path),
                level,
                format,
                rotation or log_config.rotation,
                retention or log_config.retention,
            )
        )

    quiet_third_party(log_config.third_party_level)
    return handler_ids


def _add_console_sink(level: str, format: str) -> int:
    return _logger.add(
        sys.stderr,
        format=format,
        level=level,
        colorize=True,
        backtrace=True,
        diagnose=False,
    )


def _add_file_sink(path: Path, level: str, format: str, rotation: str, retention: str) -> int:
    path.parent.mkdir(parents=True, exist_ok=True)

    return _logger.add(
        str(path),
        format=format,
        level=level,
        rotation=rotation,
        retention=retention,
        compression="zip",
        encoding="utf-8",
        enqueue=True,  # Scheduler and worker threads share this sink
        backtrace=True,
        diagnose=False,
    )


def quiet_third_party(level: str = "WARNING") -> None:
    """Raise the threshold of stdlib loggers used by httpx and APScheduler.

    Args:
        level: Standard library level name
    """
    for name in THIRD_PARTY_LOGGERS:
        logging.getLogger(name).setLevel(level)


def get_logger(name: Optional[str] = None):
    """Get a logger, bound to ``name`` when given.

    Args:
        name: Logger name (typically __name__ from calling module)

    Returns:
        Logger instance
    """
    if name:
        return _logger.bind(name=name)
    return _logger


def debug(msg: str, *args, **kwargs):
    _logger.debug(msg, *args, **kwargs)


def info(msg: str, *args, **kwargs):
    _logger.info(msg, *args, **kwargs)


def warning(msg: str, *args, **kwargs):
    _logger.warning(msg, *args, **kwargs)


def error(msg: str, *args, **kwargs):
    _logger.error(msg, *args, **kwargs)


def exception(msg: str, *args, **kwargs):
    """Log an error together with the active exception's traceback."""
    _logger.exception(msg, *args, **kwargs)


logger = _logger

__all__ = [
    "setup_logger",
    "quiet_third_party",
    "get_logger",
    "logger",
    "debug",
    "info",
    "warning",
    "error",
    "exception",
]
