"""Data models for syndication."""

from syndication.models.base import Base
from syndication.models.category import UNCATEGORIZED, CategoryCreate, CategoryModel
from syndication.models.entry import EntryModel, Marker, marker_from_string
from syndication.models.feed import FeedCreate, FeedModel
from syndication.models.user import UserCreate, UserModel

__all__ = [
    "Base",
    "UserModel",
    "UserCreate",
    "CategoryModel",
    "CategoryCreate",
    "UNCATEGORIZED",
    "FeedModel",
    "FeedCreate",
    "EntryModel",
    "Marker",
    "marker_from_string",
]
