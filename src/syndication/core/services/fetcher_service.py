"""
Facade for fetching feeds outside of a sync run.
"""

from typing import TYPE_CHECKING, Optional

from syndication.config import Config
from syndication.logger import get_logger
from syndication.models import FeedModel

if TYPE_CHECKING:
    from syndication.core.parser import FeedDocument


class FetcherService:
    """Facade for fetching feeds outside of a sync run."""

    def __init__(self, timeout_seconds: Optional[int] = None, config: Optional[Config] = None):
        """Initialize fetcher service.

        Args:
            timeout_seconds: Override default timeout
            config: Config to use instead of the global one
        """
        from syndication.core.factories import create_fetcher

        self._fetcher = create_fetcher(timeout_seconds=timeout_seconds, config=config)
        self._logger = get_logger(__name__)

    def preview_feed(self, feed: FeedModel) -> "FeedDocument":
        """Fetch a newly subscribed feed and fill in its metadata.

        The feed's title is set only when empty; its description and
        source are always replaced. Nothing is written to the store.

        Args:
            feed: Feed being created

        Returns:
            The parsed FeedDocument

        Raises:
            FeedUnreachableError: If the feed cannot be fetched or parsed
        """
        document = self._fetcher.fetch_for_preview(feed)
        self._logger.info(f"Previewed {feed.subscription}: {len(document.items)} items")
        return document


def create_fetcher_service(
    timeout_seconds: Optional[int] = None,
    config: Optional[Config] = None,
) -> FetcherService:
    """Create a FetcherService instance.

    Args:
        timeout_seconds: Override default timeout
        config: Optional config

    Returns:
        Configured FetcherService
    """
    return FetcherService(timeout_seconds=timeout_seconds, config=config)
