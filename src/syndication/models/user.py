"""
User data model.
"""

from datetime import datetime
from typing import Optional, TYPE_CHECKING

from pydantic import BaseModel, Field
from sqlalchemy import DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from syndication.models.base import Base
from syndication.utils.time_utils import utcnow

if TYPE_CHECKING:
    from syndication.models.category import CategoryModel
    from syndication.models.feed import FeedModel


class UserModel(Base):
    """SQLAlchemy ORM model for a registered user."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False)

    categories: Mapped[list["CategoryModel"]] = relationship(
        "CategoryModel",
        back_populates="user",
        cascade="all, delete-orphan",
    )
    feeds: Mapped[list["FeedModel"]] = relationship(
        "FeedModel",
        back_populates="user",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<UserModel(id={self.id}, username='{self.username}')>"


class UserCreate(BaseModel):
    """Schema for creating a new user."""

    username: str = Field(..., min_length=1, max_length=255, description="Login name")
    email: Optional[str] = Field(None, max_length=255, description="Contact address")
