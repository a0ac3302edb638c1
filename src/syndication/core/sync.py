"""
Feed synchronization orchestrator.

Applies the staleness policy to single feeds and fans syncs out over a
category, a user, or every user. A single-feed sync raises on failure;
fan-outs record each feed's failure in a SyncReport and keep going.
"""

import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import TYPE_CHECKING, Callable, Optional

from syndication.config import SyncConfig, get_config
from syndication.core.detector import ChangeDetector
from syndication.errors import SyncError
from syndication.logger import get_logger
from syndication.models import CategoryModel, FeedModel, UserModel
from syndication.utils.time_utils import utcnow

if TYPE_CHECKING:
    from syndication.storage.store import FeedStore

logger = get_logger(__name__)


@dataclass
class FeedSyncOutcome:
    """Result of syncing one feed."""

    feed_id: int
    user_id: int
    subscription: str
    new_entries: int = 0
    skipped: bool = False
    error: Optional[Exception] = None

    @property
    def success(self) -> bool:
        """True if the feed synced (or was skipped as fresh) without error."""
        return self.error is None


@dataclass
class SyncReport:
    """Collected outcomes of a fan-out sync."""

    scope: str
    outcomes: list[FeedSyncOutcome] = field(default_factory=list)
    user_errors: dict[int, Exception] = field(default_factory=dict)
    started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None

    @property
    def new_entries(self) -> int:
        """Total entries stored across all feeds."""
        return sum(outcome.new_entries for outcome in self.outcomes)

    @property
    def failed(self) -> list[FeedSyncOutcome]:
        """Outcomes of feeds that raised."""
        return [outcome for outcome in self.outcomes if not outcome.success]

    @property
    def skipped(self) -> list[FeedSyncOutcome]:
        """Outcomes of feeds left alone because they were fresh."""
        return [outcome for outcome in self.outcomes if outcome.skipped]

    @property
    def ok(self) -> bool:
        """True if no feed or user failed."""
        return not self.failed and not self.user_errors

    def extend(self, other: "SyncReport") -> None:
        """Merge another report's outcomes into this one."""
        self.outcomes.extend(other.outcomes)
        self.user_errors.update(other.user_errors)

    def summary(self) -> str:
        """One-line human readable summary."""
        return (
            f"{self.scope}: {len(self.outcomes)} feeds, {self.new_entries} new entries, "
            f"{len(self.skipped)} skipped, {len(self.failed)} failed, "
            f"{len(self.user_errors)} users failed"
        )


class SyncEngine:
    """Synchronizes feeds into the store."""

    def __init__(
        self,
        store: "FeedStore",
        detector: ChangeDetector,
        staleness_window_seconds: Optional[int] = None,
        respect_feed_ttl: Optional[bool] = None,
        max_workers: Optional[int] = None,
        clock: Optional[Callable[[], datetime]] = None,
        sync_config: Optional[SyncConfig] = None,
    ):
        """Initialize sync engine.

        Args:
            store: Store used for lookups and write-back
            detector: Change detector performing fetch and dedup
            staleness_window_seconds: Minimum age of last_updated before refetching
            respect_feed_ttl: Widen the window to a feed's TTL hint when larger
            max_workers: Concurrent feed syncs within one fan-out
            clock: Returns the current naive UTC time
            sync_config: Sync section to use instead of the global config
        """
        sync_config = sync_config or get_config().sync

        self.store = store
        self.detector = detector
        self.staleness_window = timedelta(
            seconds=staleness_window_seconds
            if staleness_window_seconds is not None
            else sync_config.staleness_window_seconds
        )
        self.respect_feed_ttl = (
            respect_feed_ttl if respect_feed_ttl is not None else sync_config.respect_feed_ttl
        )
        self.max_workers = max_workers or sync_config.max_workers
        self.clock = clock or utcnow

        self._locks: dict[int, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    def is_fresh(self, feed: FeedModel, now: Optional[datetime] = None) -> bool:
        """Check whether a feed was updated too recently to fetch again.

        Args:
            feed: Feed to check
            now: Current time (defaults to the engine clock)

        Returns:
            True if the feed should be skipped
        """
        if feed.last_updated is None:
            return False

        window = self.staleness_window
        if self.respect_feed_ttl and feed.ttl:
            window = max(window, timedelta(minutes=feed.ttl))

        now = now or self.clock()
        return not now > feed.last_updated + window

    def sync_feed(self, feed: FeedModel, user: UserModel) -> FeedSyncOutcome:
        """Sync one feed.

        Fresh feeds are skipped without a network call. Otherwise new
        entries and the feed's updated metadata are written to the store.

        Args:
            feed: Feed to sync; updated in place
            user: Owning user

        Returns:
            FeedSyncOutcome (never carries an error)

        Raises:
            TransportError: If the fetch fails
            ParseError: If the document is malformed
            StoreError: If a store lookup or write fails
        """
        outcome = FeedSyncOutcome(feed_id=feed.id, user_id=user.id, subscription=feed.subscription)

        with self._feed_lock(feed.id):
            if self.is_fresh(feed):
                logger.debug(f"Feed {feed.id} is fresh, skipping")
                outcome.skipped = True
                return outcome

            result = self.detector.check_for_updates(feed, user)
            if result.changed:
                self.store.create_entries(result.entries, feed, user)
                self.store.update_feed(feed, user)

        outcome.new_entries = len(result.entries)
        if outcome.new_entries:
            logger.info(f"Feed {feed.id}: stored {outcome.new_entries} new entries")

        return outcome

    def sync_category(self, category: CategoryModel, user: UserModel) -> SyncReport:
        """Sync every feed in a category.

        Args:
            category: Category to sync
            user: Owning user

        Returns:
            SyncReport with one outcome per feed

        Raises:
            NotFoundError: If the category does not exist for the user
            StoreError: If the feed lookup fails
        """
        report = SyncReport(scope=f"category:{category.id}", started_at=self.clock())
        feeds = self.store.feeds_of_category(category, user)

        report.outcomes.extend(self._sync_feeds(feeds, user))
        report.finished_at = self.clock()
        return report

    def sync_user(self, user: UserModel) -> SyncReport:
        """Sync every feed owned by a user.

        Args:
            user: User to sync

        Returns:
            SyncReport with one outcome per feed

        Raises:
            StoreError: If the feed lookup fails
        """
        report = SyncReport(scope=f"user:{user.id}", started_at=self.clock())
        feeds = self.store.feeds_of_user(user)

        report.outcomes.extend(self._sync_feeds(feeds, user))
        report.finished_at = self.clock()
        return report

    def sync_all_users(self) -> SyncReport:
        """Sync every feed of every registered user.

        A user whose feeds cannot be listed is recorded in
        ``user_errors`` and the run moves on.

        Returns:
            SyncReport aggregating all users

        Raises:
            StoreError: If the user list itself cannot be loaded
        """
        report = SyncReport(scope="all", started_at=self.clock())
        users = self.store.users_all()

        for user in users:
            try:
                report.extend(self.sync_user(user))
            except SyncError as e:
                logger.error(f"Failed to sync user {user.id}: {e}")
                report.user_errors[user.id] = e
            except Exception as e:
                logger.exception(f"Unexpected error syncing user {user.id}: {e}")
                report.user_errors[user.id] = e

        report.finished_at = self.clock()
        logger.info(f"Sync finished - {report.summary()}")
        return report

    def _sync_feeds(self, feeds: list[FeedModel], user: UserModel) -> list[FeedSyncOutcome]:
        """Sync feeds in order, sequentially or on a bounded thread pool."""
        if self.max_workers <= 1 or len(feeds) <= 1:
            return [self._sync_feed_isolated(feed, user) for feed in feeds]

        with ThreadPoolExecutor(max_workers=self.max_workers, thread_name_prefix="feed-sync") as executor:
            futures = [executor.submit(self._sync_feed_isolated, feed, user) for feed in feeds]
            return [future.result() for future in futures]

    def _sync_feed_isolated(self, feed: FeedModel, user: UserModel) -> FeedSyncOutcome:
        """Sync one feed, turning any failure into a recorded outcome."""
        try:
            return self.sync_feed(feed, user)
        except SyncError as e:
            logger.warning(f"Failed to sync feed {feed.id} ({feed.subscription}): {e}")
            error = e
        except Exception as e:
            logger.exception(f"Unexpected error syncing feed {feed.id} ({feed.subscription}): {e}")
            error = e

        return FeedSyncOutcome(
            feed_id=feed.id,
            user_id=user.id,
            subscription=feed.subscription,
            error=error,
        )

    def _feed_lock(self, feed_id: int) -> threading.Lock:
        """Get the lock serializing syncs of one feed."""
        with self._locks_guard:
            return self._locks.setdefault(feed_id, threading.Lock())
