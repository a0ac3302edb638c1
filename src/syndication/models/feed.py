"""
Feed data model for RSS/Atom subscriptions.
"""

from datetime import datetime
from typing import Optional, TYPE_CHECKING

from pydantic import BaseModel, Field
from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from syndication.models.base import Base
from syndication.utils.time_utils import utcnow

if TYPE_CHECKING:
    from syndication.models.category import CategoryModel
    from syndication.models.entry import EntryModel
    from syndication.models.user import UserModel


class FeedModel(Base):
    """SQLAlchemy ORM model for Feed.

    ``etag`` and ``last_updated`` are the sync bookkeeping: the validator
    sent with conditional requests and the time new content was last seen.
    ``last_updated`` is None until the first successful sync.
    """

    __tablename__ = "feeds"

    __table_args__ = (
        Index("ix_feeds_user_category", "user_id", "category_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    category_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("categories.id", ondelete="SET NULL"), nullable=True
    )

    subscription: Mapped[str] = mapped_column(String(2048), nullable=False)
    title: Mapped[str] = mapped_column(String(1000), default="", nullable=False)
    description: Mapped[str] = mapped_column(Text, default="", nullable=False)
    source: Mapped[str] = mapped_column(String(2048), default="", nullable=False)
    ttl: Mapped[int] = mapped_column(Integer, default=0, nullable=False, comment="Update hint in minutes")
    status: Mapped[str] = mapped_column(String(64), default="", nullable=False)

    # Sync bookkeeping
    etag: Mapped[str] = mapped_column(String(500), default="", nullable=False)
    last_updated: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=utcnow, onupdate=utcnow, nullable=False
    )

    user: Mapped["UserModel"] = relationship("UserModel", back_populates="feeds")
    category: Mapped[Optional["CategoryModel"]] = relationship("CategoryModel", back_populates="feeds")
    entries: Mapped[list["EntryModel"]] = relationship(
        "EntryModel",
        back_populates="feed",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<FeedModel(id={self.id}, subscription='{self.subscription}', title='{self.title}')>"


class FeedCreate(BaseModel):
    """Schema for creating a new feed."""

    subscription: str = Field(..., max_length=2048, description="Feed URL")
    title: str = Field("", max_length=1000, description="Feed title")
    description: str = Field("", description="Feed description")
    category_id: Optional[int] = Field(None, description="Owning category (uncategorized if omitted)")
    ttl: int = Field(0, ge=0, description="Update hint in minutes")
    etag: str = Field("", max_length=500)
    last_updated: Optional[datetime] = None
