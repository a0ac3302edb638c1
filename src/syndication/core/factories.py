"""
Factory functions for creating core components with configuration applied.

Every component takes its defaults from the config system; keyword
arguments override single values.

Usage:
    from syndication.core.factories import create_sync_engine

    engine = create_sync_engine(store)
    report = engine.sync_all_users()
"""

from typing import TYPE_CHECKING, Optional

from syndication.config import Config, get_config
from syndication.core.detector import ChangeDetector
from syndication.core.fetcher import FeedFetcher
from syndication.core.parser import FeedDocumentParser
from syndication.core.sync import SyncEngine

if TYPE_CHECKING:
    from apscheduler.schedulers.background import BackgroundScheduler

    from syndication.core.scheduler import SyncScheduler
    from syndication.storage.store import FeedStore


def create_parser() -> FeedDocumentParser:
    """Create a FeedDocumentParser instance."""
    return FeedDocumentParser()


def create_fetcher(
    timeout_seconds: Optional[int] = None,
    user_agent: Optional[str] = None,
    config: Optional[Config] = None,
) -> FeedFetcher:
    """Create a configured FeedFetcher instance.

    Args:
        timeout_seconds: Override default timeout
        user_agent: Override default User-Agent
        config: Config to use instead of the global one

    Returns:
        Configured FeedFetcher instance
    """
    config = config or get_config()
    return FeedFetcher(
        timeout_seconds=timeout_seconds,
        user_agent=user_agent,
        parser=create_parser(),
        fetcher_config=config.fetcher,
    )


def create_detector(
    store: "FeedStore",
    fetcher: Optional[FeedFetcher] = None,
    config: Optional[Config] = None,
) -> ChangeDetector:
    """Create a ChangeDetector backed by a store.

    Args:
        store: Store answering GUID existence queries
        fetcher: Fetcher to use (a configured one is created if omitted)
        config: Config to use instead of the global one

    Returns:
        Configured ChangeDetector instance
    """
    return ChangeDetector(fetcher=fetcher or create_fetcher(config=config), store=store)


def create_sync_engine(
    store: "FeedStore",
    fetcher: Optional[FeedFetcher] = None,
    staleness_window_seconds: Optional[int] = None,
    max_workers: Optional[int] = None,
    config: Optional[Config] = None,
) -> SyncEngine:
    """Create a configured SyncEngine instance.

    Args:
        store: Store used for lookups and write-back
        fetcher: Fetcher to use (a configured one is created if omitted)
        staleness_window_seconds: Override the staleness window
        max_workers: Override fan-out concurrency
        config: Config to use instead of the global one

    Returns:
        Configured SyncEngine instance
    """
    config = config or get_config()
    return SyncEngine(
        store=store,
        detector=create_detector(store, fetcher=fetcher, config=config),
        staleness_window_seconds=staleness_window_seconds,
        max_workers=max_workers,
        sync_config=config.sync,
    )


def create_scheduler(
    engine: SyncEngine,
    interval_minutes: Optional[int] = None,
    scheduler: Optional["BackgroundScheduler"] = None,
    config: Optional[Config] = None,
) -> "SyncScheduler":
    """Create a configured SyncScheduler instance.

    Args:
        engine: Engine to run on each tick
        interval_minutes: Override the sync interval
        scheduler: APScheduler instance to use instead of a new one
        config: Config to use instead of the global one

    Returns:
        Configured SyncScheduler instance
    """
    from syndication.core.scheduler import SyncScheduler

    config = config or get_config()
    return SyncScheduler(
        engine=engine,
        interval_minutes=interval_minutes,
        scheduler=scheduler,
        sync_config=config.sync,
    )
