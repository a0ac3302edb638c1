"""
Facade for feed synchronization.
"""

from typing import TYPE_CHECKING, Optional

from syndication.config import Config
from syndication.logger import get_logger
from syndication.models import CategoryModel, FeedModel, UserModel

if TYPE_CHECKING:
    from syndication.core.fetcher import FeedFetcher
    from syndication.core.sync import FeedSyncOutcome, SyncEngine, SyncReport
    from syndication.storage.store import FeedStore


class SyncService:
    """Facade for feed synchronization.

    ``sync_feed`` raises on failure; the fan-out methods return a
    SyncReport recording per-feed failures.
    """

    def __init__(
        self,
        store: "FeedStore",
        fetcher: Optional["FeedFetcher"] = None,
        config: Optional[Config] = None,
    ):
        """Initialize sync service.

        Args:
            store: Store used for lookups and write-back
            fetcher: Optional fetcher to use instead of a configured one
            config: Config to use instead of the global one
        """
        from syndication.core.factories import create_sync_engine

        self._engine = create_sync_engine(store, fetcher=fetcher, config=config)
        self._logger = get_logger(__name__)

    @property
    def engine(self) -> "SyncEngine":
        """The underlying SyncEngine."""
        return self._engine

    def sync_feed(self, feed: FeedModel, user: UserModel) -> "FeedSyncOutcome":
        """Sync a single feed.

        Args:
            feed: Feed to sync
            user: Owning user

        Returns:
            FeedSyncOutcome

        Raises:
            SyncError: If fetching, parsing or storing fails
        """
        return self._engine.sync_feed(feed, user)

    def sync_category(self, category: CategoryModel, user: UserModel) -> "SyncReport":
        """Sync every feed of a category.

        Raises:
            NotFoundError: If the category does not exist for the user
        """
        return self._engine.sync_category(category, user)

    def sync_user(self, user: UserModel) -> "SyncReport":
        """Sync every feed of a user."""
        return self._engine.sync_user(user)

    def sync_all_users(self) -> "SyncReport":
        """Sync every feed of every user."""
        return self._engine.sync_all_users()


def create_sync_service(
    store: "FeedStore",
    fetcher: Optional["FeedFetcher"] = None,
    config: Optional[Config] = None,
) -> SyncService:
    """Create a SyncService instance.

    Args:
        store: Store used for lookups and write-back
        fetcher: Optional fetcher
        config: Optional config

    Returns:
        Configured SyncService
    """
    return SyncService(store, fetcher=fetcher, config=config)
