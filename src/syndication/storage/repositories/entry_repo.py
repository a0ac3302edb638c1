"""
Entry repository for database operations.
"""

from typing import Optional

from sqlalchemy.orm import Session

from syndication.models import EntryModel, Marker
from syndication.storage.repositories.base import BaseRepository


class EntryRepository(BaseRepository[EntryModel]):
    """Repository for Entry operations scoped to a user."""

    def __init__(self, session: Session) -> None:
        """Initialize repository with a database session.

        Args:
            session: SQLAlchemy Session instance
        """
        super().__init__(session, EntryModel)

    def exists_by_guid(self, guid: str, user_id: int) -> bool:
        """Check whether the user already has an entry with this GUID.

        Args:
            guid: Entry GUID
            user_id: Owning user ID

        Returns:
            True if such an entry exists
        """
        query = self.session.query(EntryModel.id).filter(
            EntryModel.guid == guid, EntryModel.user_id == user_id
        )
        return self.session.query(query.exists()).scalar()

    def create_many(self, entries: list[EntryModel], feed_id: int, user_id: int) -> list[EntryModel]:
        """Insert entries in order, binding each to the feed and user.

        Args:
            entries: Transient EntryModel instances
            feed_id: Owning feed ID
            user_id: Owning user ID

        Returns:
            The inserted entries
        """
        for entry in entries:
            entry.feed_id = feed_id
            entry.user_id = user_id
            if entry.mark is None:
                entry.mark = Marker.UNREAD.value
            self.session.add(entry)
            # Flush per row so created_at/id follow document order
            self.session.flush()

        return entries

    def list_for_feed(
        self,
        feed_id: int,
        user_id: int,
        marker: Optional[Marker] = None,
        newest_first: bool = True,
    ) -> list[EntryModel]:
        """List a feed's entries.

        Args:
            feed_id: Feed ID
            user_id: Owning user ID
            marker: Only entries with this marker (all when None)
            newest_first: Order by creation time descending

        Returns:
            List of EntryModel instances
        """
        filters = {"feed_id": feed_id, "user_id": user_id}
        if marker is not None:
            filters["mark"] = marker.value
        return self.list(order_by="id", order_desc=newest_first, **filters)

    def count_for_feed(self, feed_id: int, user_id: int) -> int:
        """Count a feed's entries."""
        return self.count(feed_id=feed_id, user_id=user_id)

    def count_for_user(self, user_id: int) -> int:
        """Count all of a user's entries."""
        return self.count(user_id=user_id)
