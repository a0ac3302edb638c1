"""
Category data model.

Every user owns an ``uncategorized`` category that receives feeds created
without an explicit category.
"""

from datetime import datetime
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field
from sqlalchemy import DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from syndication.models.base import Base
from syndication.utils.time_utils import utcnow

if TYPE_CHECKING:
    from syndication.models.feed import FeedModel
    from syndication.models.user import UserModel

UNCATEGORIZED = "uncategorized"


class CategoryModel(Base):
    """SQLAlchemy ORM model for a user's feed category."""

    __tablename__ = "categories"

    __table_args__ = (
        UniqueConstraint("user_id", "name", name="uq_categories_user_name"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False)

    user: Mapped["UserModel"] = relationship("UserModel", back_populates="categories")
    feeds: Mapped[list["FeedModel"]] = relationship("FeedModel", back_populates="category")

    def __repr__(self) -> str:
        return f"<CategoryModel(id={self.id}, user_id={self.user_id}, name='{self.name}')>"


class CategoryCreate(BaseModel):
    """Schema for creating a new category."""

    name: str = Field(..., min_length=1, max_length=255, description="Category name")
