"""
Feed repository for database operations.
"""

from typing import Optional

from sqlalchemy.orm import Session

from syndication.models import FeedCreate, FeedModel
from syndication.storage.repositories.base import BaseRepository
from syndication.storage.repositories.category_repo import CategoryRepository


class FeedRepository(BaseRepository[FeedModel]):
    """Repository for Feed operations scoped to a user."""

    def __init__(self, session: Session) -> None:
        """Initialize repository with a database session.

        Args:
            session: SQLAlchemy Session instance
        """
        super().__init__(session, FeedModel)

    def create(self, feed_data: FeedCreate, user_id: int) -> FeedModel:
        """Create a new feed owned by a user.

        Feeds created without a category land in the user's
        uncategorized category.

        Args:
            feed_data: Feed creation data
            user_id: Owning user ID

        Returns:
            Created FeedModel instance

        Raises:
            ValueError: If the category does not belong to the user
        """
        data = feed_data.model_dump()
        category_repo = CategoryRepository(self.session)

        if data["category_id"] is not None:
            if category_repo.get_for_user(data["category_id"], user_id) is None:
                raise ValueError("Feed has invalid category")
        else:
            uncategorized = category_repo.get_uncategorized(user_id)
            data["category_id"] = uncategorized.id if uncategorized else None

        return self.add(FeedModel(user_id=user_id, **data))

    def get_for_user(self, feed_id: int, user_id: int) -> Optional[FeedModel]:
        """Get a feed only if it belongs to the user.

        Args:
            feed_id: Feed ID
            user_id: Owning user ID

        Returns:
            FeedModel instance or None
        """
        return (
            self.session.query(FeedModel)
            .filter(FeedModel.id == feed_id, FeedModel.user_id == user_id)
            .first()
        )

    def list_for_user(self, user_id: int) -> list[FeedModel]:
        """List all feeds owned by a user."""
        return self.list(user_id=user_id)

    def list_for_category(self, category_id: int, user_id: int) -> list[FeedModel]:
        """List a user's feeds in one category."""
        return self.list(user_id=user_id, category_id=category_id)

    def update_sync_state(self, feed: FeedModel, source: FeedModel) -> FeedModel:
        """Copy cached metadata and sync bookkeeping from ``source`` onto ``feed``.

        ``last_updated`` never moves backwards.

        Args:
            feed: Persistent FeedModel instance to update
            source: FeedModel carrying the new values

        Returns:
            Updated FeedModel instance
        """
        feed.title = source.title or ""
        feed.description = source.description or ""
        feed.source = source.source or ""
        feed.etag = source.etag or ""
        feed.ttl = source.ttl or 0

        if source.last_updated is not None and (
            feed.last_updated is None or source.last_updated > feed.last_updated
        ):
            feed.last_updated = source.last_updated

        self.session.flush()
        return feed
