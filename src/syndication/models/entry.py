"""
Entry data model for ingested feed items.
"""

from datetime import datetime
from enum import Enum
from typing import Optional, TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from syndication.models.base import Base
from syndication.utils.time_utils import utcnow

if TYPE_CHECKING:
    from syndication.models.feed import FeedModel


class Marker(str, Enum):
    """Read state of an entry."""

    UNREAD = "unread"
    READ = "read"
    SAVED = "saved"


def marker_from_string(value: Optional[str]) -> Optional[Marker]:
    """Parse a marker name case-insensitively.

    Args:
        value: Marker name such as "unread" or "READ"

    Returns:
        Marker, or None for empty or unknown names
    """
    if not value:
        return None

    try:
        return Marker(value.strip().lower())
    except ValueError:
        return None


class EntryModel(Base):
    """SQLAlchemy ORM model for Entry.

    GUIDs are unique per owning user. Only ``mark`` changes after creation.
    """

    __tablename__ = "entries"

    __table_args__ = (
        UniqueConstraint("user_id", "guid", name="uq_entries_user_guid"),
        Index("ix_entries_feed_created", "feed_id", "created_at"),
        Index("ix_entries_user_mark", "user_id", "mark"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    feed_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("feeds.id", ondelete="CASCADE"), nullable=False, index=True
    )

    guid: Mapped[str] = mapped_column(String(2048), nullable=False)
    title: Mapped[str] = mapped_column(String(1000), default="", nullable=False)
    link: Mapped[str] = mapped_column(String(2048), default="", nullable=False)
    description: Mapped[str] = mapped_column(Text, default="", nullable=False)
    author: Mapped[str] = mapped_column(String(500), default="", nullable=False)

    mark: Mapped[str] = mapped_column(String(16), default=Marker.UNREAD.value, nullable=False)

    published_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False)

    feed: Mapped["FeedModel"] = relationship("FeedModel", back_populates="entries")

    def __repr__(self) -> str:
        return f"<EntryModel(id={self.id}, guid='{self.guid}', title='{self.title}')>"
