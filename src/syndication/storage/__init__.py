"""Storage layer modules for syndication."""

from syndication.storage.database import DatabaseManager, build_url, create_db_engine
from syndication.storage.store import DatabaseFeedStore, FeedStore

__all__ = [
    "DatabaseManager",
    "DatabaseFeedStore",
    "FeedStore",
    "build_url",
    "create_db_engine",
]
