"""
Application composition root.

Wires configuration, database, store, sync engine and scheduler together.
There is no global scheduler: each SyndicationApp owns its own.
"""

from typing import Optional

from apscheduler.schedulers.background import BackgroundScheduler

from syndication.config import Config, get_config
from syndication.core.services import (
    FetcherService,
    SchedulerService,
    SyncService,
    create_fetcher_service,
    create_scheduler_service,
    create_sync_service,
)
from syndication.logger import get_logger
from syndication.storage import DatabaseFeedStore, DatabaseManager

logger = get_logger(__name__)


class SyndicationApp:
    """Owns the long-lived components of a running syndication process."""

    def __init__(
        self,
        config: Optional[Config] = None,
        db_manager: Optional[DatabaseManager] = None,
        scheduler: Optional[BackgroundScheduler] = None,
    ):
        """Initialize the application.

        Args:
            config: Config to use instead of the global one
            db_manager: DatabaseManager to use instead of one built from config
            scheduler: APScheduler instance handed to the sync scheduler
        """
        self.config = config or get_config()
        self.db_manager = db_manager or DatabaseManager(db_config=self.config.database)
        self.store = DatabaseFeedStore(self.db_manager)

        self.sync_service: SyncService = create_sync_service(self.store, config=self.config)
        self.fetcher_service: FetcherService = create_fetcher_service(config=self.config)
        self.scheduler_service: SchedulerService = create_scheduler_service(
            self.sync_service.engine,
            scheduler=scheduler,
            config=self.config,
        )

    def init_db(self, drop_all: bool = False) -> None:
        """Create database tables.

        Args:
            drop_all: Drop existing tables first
        """
        self.db_manager.init_db(drop_all=drop_all)

    def start(self) -> None:
        """Create tables if needed and start periodic syncing."""
        self.init_db()

        if not self.config.sync.enabled:
            logger.info("Periodic sync disabled, scheduler not started")
            return

        self.scheduler_service.start()

    def stop(self) -> None:
        """Stop periodic syncing and release the database."""
        if self.scheduler_service.is_running():
            self.scheduler_service.stop()
        self.db_manager.close()

    def __enter__(self) -> "SyndicationApp":
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.stop()
