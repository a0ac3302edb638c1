"""
Store used by the synchronization engine.

``FeedStore`` is the narrow set of operations the engine needs.
``DatabaseFeedStore`` implements it on top of the repositories, running
each call in its own transaction.
"""

from typing import Protocol

from sqlalchemy.exc import SQLAlchemyError

from syndication.errors import NotFoundError, StoreError
from syndication.logger import get_logger
from syndication.models import CategoryModel, EntryModel, FeedModel, UserModel
from syndication.storage.database import DatabaseManager
from syndication.storage.repositories import (
    CategoryRepository,
    EntryRepository,
    FeedRepository,
    UserRepository,
)

logger = get_logger(__name__)


class FeedStore(Protocol):
    """Persistence operations required by the sync engine."""

    def users_all(self) -> list[UserModel]:
        ...

    def feeds_of_user(self, user: UserModel) -> list[FeedModel]:
        ...

    def feeds_of_category(self, category: CategoryModel, user: UserModel) -> list[FeedModel]:
        ...

    def entry_exists_by_guid(self, guid: str, user: UserModel) -> bool:
        ...

    def create_entries(self, entries: list[EntryModel], feed: FeedModel, user: UserModel) -> None:
        ...

    def update_feed(self, feed: FeedModel, user: UserModel) -> None:
        ...


class DatabaseFeedStore:
    """SQLAlchemy implementation of FeedStore."""

    def __init__(self, db_manager: DatabaseManager):
        """Initialize the store.

        Args:
            db_manager: DatabaseManager providing transactional sessions
        """
        self.db_manager = db_manager

    def users_all(self) -> list[UserModel]:
        """Return every registered user."""
        try:
            with self.db_manager.session() as session:
                return UserRepository(session).list_all()
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to list users: {e}") from e

    def feeds_of_user(self, user: UserModel) -> list[FeedModel]:
        """Return all feeds owned by the user."""
        try:
            with self.db_manager.session() as session:
                return FeedRepository(session).list_for_user(user.id)
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to list feeds of user {user.id}: {e}") from e

    def feeds_of_category(self, category: CategoryModel, user: UserModel) -> list[FeedModel]:
        """Return the user's feeds in a category.

        Raises:
            NotFoundError: If the category does not exist for this user
        """
        try:
            with self.db_manager.session() as session:
                if CategoryRepository(session).get_for_user(category.id, user.id) is None:
                    raise NotFoundError("Category does not exist")
                return FeedRepository(session).list_for_category(category.id, user.id)
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to list feeds of category {category.id}: {e}") from e

    def entry_exists_by_guid(self, guid: str, user: UserModel) -> bool:
        """Check whether the user already has an entry with this GUID."""
        try:
            with self.db_manager.session() as session:
                return EntryRepository(session).exists_by_guid(guid, user.id)
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to look up entry {guid!r}: {e}") from e

    def create_entries(self, entries: list[EntryModel], feed: FeedModel, user: UserModel) -> None:
        """Insert new entries for a feed in one transaction.

        Raises:
            NotFoundError: If the feed does not exist for this user
        """
        if not entries:
            return

        try:
            with self.db_manager.session() as session:
                if FeedRepository(session).get_for_user(feed.id, user.id) is None:
                    raise NotFoundError("Feed does not exist")
                EntryRepository(session).create_many(entries, feed.id, user.id)
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to store entries for feed {feed.id}: {e}") from e

        logger.debug(f"Stored {len(entries)} entries for feed {feed.id}")

    def update_feed(self, feed: FeedModel, user: UserModel) -> None:
        """Write back the feed's cached metadata and sync bookkeeping.

        Raises:
            NotFoundError: If the feed does not exist for this user
        """
        try:
            with self.db_manager.session() as session:
                repo = FeedRepository(session)
                stored = repo.get_for_user(feed.id, user.id)
                if stored is None:
                    raise NotFoundError("Feed does not exist")
                repo.update_sync_state(stored, feed)
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to update feed {feed.id}: {e}") from e
