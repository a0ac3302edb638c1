"""
Change detection for fetched feeds.

Decides whether a fetch produced new data and which items have not been
ingested yet. The store is only read, never written.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Callable, Optional

from syndication.core.fetcher import FeedFetcher
from syndication.core.materializer import materialize_entry
from syndication.logger import get_logger
from syndication.models import EntryModel, FeedModel, UserModel
from syndication.utils.hash_utils import compute_item_guid
from syndication.utils.time_utils import utcnow

if TYPE_CHECKING:
    from syndication.storage.store import FeedStore

logger = get_logger(__name__)


@dataclass
class DetectionResult:
    """Outcome of an update check.

    ``changed`` is True when the feed object was updated in memory and
    must be written back, even if ``entries`` is empty.
    """

    entries: list[EntryModel] = field(default_factory=list)
    changed: bool = False


class ChangeDetector:
    """Fetches a feed and selects the items that are new for its owner."""

    def __init__(
        self,
        fetcher: FeedFetcher,
        store: "FeedStore",
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """Initialize change detector.

        Args:
            fetcher: Fetcher used for the conditional request
            store: Store answering GUID existence queries
            clock: Returns the current naive UTC time
        """
        self.fetcher = fetcher
        self.store = store
        self.clock = clock or utcnow

    def check_for_updates(self, feed: FeedModel, user: UserModel) -> DetectionResult:
        """Fetch a feed and collect entries not yet stored for the user.

        On a real change the feed's title, description, source, ttl, etag
        and last_updated are updated in memory; persisting them is the
        caller's job. A document with nothing new still records a changed
        ETag.

        Args:
            feed: Feed to check
            user: Owner whose entries are used for deduplication

        Returns:
            DetectionResult with new entries in document order

        Raises:
            TransportError: If the fetch fails
            ParseError: If the document is malformed
            StoreError: If an existence lookup fails
        """
        result = self.fetcher.fetch(feed)
        if result.not_modified:
            return DetectionResult()

        document = result.document

        if document.updated is not None and feed.last_updated is not None:
            if not document.updated > feed.last_updated:
                logger.debug(f"Feed {feed.id} unchanged since {feed.last_updated}")
                return self._refresh_etag(feed, result.etag)

        if not document.items:
            logger.debug(f"Feed {feed.id} has no items")
            return self._refresh_etag(feed, result.etag)

        entries = []
        seen = set()
        for item in document.items:
            if not item.guid:
                item.guid = compute_item_guid(item.title, item.link)

            if item.guid in seen:
                continue
            seen.add(item.guid)

            if self.store.entry_exists_by_guid(item.guid, user):
                continue

            entries.append(materialize_entry(feed, item))

        feed.title = document.title or feed.title
        feed.description = document.description
        feed.source = document.link
        feed.ttl = document.ttl
        if result.etag:
            feed.etag = result.etag

        now = self.clock()
        if feed.last_updated is None or now > feed.last_updated:
            feed.last_updated = now

        logger.debug(
            f"Feed {feed.id}: {len(entries)} new of {len(document.items)} items"
        )

        return DetectionResult(entries=entries, changed=True)

    @staticmethod
    def _refresh_etag(feed: FeedModel, etag: Optional[str]) -> DetectionResult:
        """Record a new ETag on an otherwise unchanged feed."""
        if not etag or etag == feed.etag:
            return DetectionResult()

        feed.etag = etag
        return DetectionResult(changed=True)
