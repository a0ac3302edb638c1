"""
Exceptions raised by the feed synchronization engine.

Single-feed operations raise these to their caller. Fan-out operations
catch them per feed and record them in a SyncReport instead.
"""

from typing import Optional


class SyncError(Exception):
    """Base class for every synchronization failure."""


class FetchError(SyncError):
    """A remote feed could not be retrieved or understood."""

    def __init__(self, message: str, url: Optional[str] = None, http_status: Optional[int] = None):
        super().__init__(message)
        self.url = url
        self.http_status = http_status


class TransportError(FetchError):
    """DNS, connection, timeout or HTTP status failure."""


class ParseError(FetchError):
    """The response body is not a recognizable RSS/Atom document."""


class FeedUnreachableError(FetchError):
    """A newly added feed could not be previewed."""


class StoreError(SyncError):
    """A store lookup or write failed."""


class NotFoundError(StoreError):
    """A feed or category vanished, or is not owned by the acting user."""
