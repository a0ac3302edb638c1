"""
RSS/Atom feed fetcher with conditional request support.
"""

import time
from dataclasses import dataclass
from typing import Optional

import httpx

from syndication.config import FetcherConfig, get_config
from syndication.core.parser import FeedDocument, FeedDocumentParser
from syndication.errors import FeedUnreachableError, FetchError, TransportError
from syndication.logger import get_logger
from syndication.models import FeedModel

logger = get_logger(__name__)


@dataclass
class FetchResult:
    """Result of a conditional feed fetch.

    ``document`` is None when the server signalled "not modified"
    (an empty body, including HTTP 304).
    """

    feed_url: str
    http_status: int
    document: Optional[FeedDocument] = None
    etag: Optional[str] = None
    fetch_time_seconds: float = 0.0

    @property
    def not_modified(self) -> bool:
        """True when the fetch produced no new document."""
        return self.document is None


class FeedFetcher:
    """HTTP feed fetcher.

    Transport failures and malformed documents are raised, never
    swallowed. Retries are left to callers.
    """

    def __init__(
        self,
        timeout_seconds: Optional[int] = None,
        user_agent: Optional[str] = None,
        parser: Optional[FeedDocumentParser] = None,
        fetcher_config: Optional[FetcherConfig] = None,
    ):
        """Initialize feed fetcher.

        Args:
            timeout_seconds: Request timeout in seconds
            user_agent: User-Agent header for HTTP requests
            parser: Document parser (a default one is created if omitted)
            fetcher_config: Fetcher section to use instead of the global config
        """
        fetcher_config = fetcher_config or get_config().fetcher

        self.timeout_seconds = timeout_seconds or fetcher_config.timeout_seconds
        self.user_agent = user_agent or fetcher_config.user_agent
        self.follow_redirects = fetcher_config.follow_redirects
        self.max_redirects = fetcher_config.max_redirects
        self.parser = parser or FeedDocumentParser()

    def fetch(self, feed: FeedModel) -> FetchResult:
        """Conditionally fetch and parse a feed.

        Args:
            feed: Feed to fetch; its ETag is sent as If-None-Match when set

        Returns:
            FetchResult, with ``not_modified`` set for an empty body

        Raises:
            TransportError: On DNS, connection, timeout or HTTP status failure
            ParseError: If the body is not a feed document
        """
        start_time = time.time()
        url = feed.subscription

        logger.debug(f"Fetching feed: {feed.title or url} (ID: {feed.id})")

        response = self._fetch_http(url, etag=feed.etag or None)
        etag = response.headers.get("ETag")

        if not response.content:
            logger.debug(f"Feed not modified: {url}")
            return FetchResult(
                feed_url=url,
                http_status=response.status_code,
                etag=etag,
                fetch_time_seconds=time.time() - start_time,
            )

        document = self.parser.parse(response.content, url=url)
        fetch_time = time.time() - start_time

        logger.info(
            f"Fetched {len(document.items)} items from {feed.title or url} in {fetch_time:.2f}s"
        )

        return FetchResult(
            feed_url=url,
            http_status=response.status_code,
            document=document,
            etag=etag,
            fetch_time_seconds=fetch_time,
        )

    def fetch_for_preview(self, feed: FeedModel) -> FeedDocument:
        """Fetch a new feed unconditionally to fill in its metadata.

        The title is only filled in when the feed has none; description
        and source are always taken from the document.

        Args:
            feed: Newly created feed

        Returns:
            The parsed FeedDocument

        Raises:
            FeedUnreachableError: If the feed cannot be fetched or parsed
        """
        url = feed.subscription

        try:
            response = self._fetch_http(url)
            if not response.content:
                raise TransportError("Empty response body", url=url, http_status=response.status_code)
            document = self.parser.parse(response.content, url=url)
        except FetchError as e:
            logger.warning(f"Feed unreachable: {url}: {e}")
            raise FeedUnreachableError(
                f"Feed unreachable: {e}", url=url, http_status=e.http_status
            ) from e

        if not feed.title:
            feed.title = document.title
        feed.description = document.description
        feed.source = document.link

        return document

    def _fetch_http(self, url: str, etag: Optional[str] = None) -> httpx.Response:
        """Fetch URL with HTTP client.

        Args:
            url: URL to fetch
            etag: Optional ETag for conditional request

        Returns:
            httpx Response (status < 400)

        Raises:
            TransportError: On timeout, network error or HTTP error status
        """
        headers = {"User-Agent": self.user_agent}

        if etag:
            headers["If-None-Match"] = etag

        try:
            with httpx.Client(
                timeout=self.timeout_seconds,
                follow_redirects=self.follow_redirects,
                max_redirects=self.max_redirects,
            ) as client:
                response = client.get(url, headers=headers)
        except httpx.TimeoutException as e:
            raise TransportError(f"Timeout: {e}", url=url) from e
        except httpx.RequestError as e:
            raise TransportError(f"Request error: {e}", url=url) from e

        if response.status_code >= 400:
            raise TransportError(
                f"HTTP {response.status_code}", url=url, http_status=response.status_code
            )

        return response

