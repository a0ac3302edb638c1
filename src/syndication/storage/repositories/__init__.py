"""Repository pattern implementations for data access."""

from syndication.storage.repositories.category_repo import CategoryRepository
from syndication.storage.repositories.entry_repo import EntryRepository
from syndication.storage.repositories.feed_repo import FeedRepository
from syndication.storage.repositories.user_repo import UserRepository

__all__ = [
    "CategoryRepository",
    "EntryRepository",
    "FeedRepository",
    "UserRepository",
]
