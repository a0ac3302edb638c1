"""
Category repository for database operations.
"""

from typing import Optional

from sqlalchemy.orm import Session

from syndication.models import UNCATEGORIZED, CategoryCreate, CategoryModel
from syndication.storage.repositories.base import BaseRepository


class CategoryRepository(BaseRepository[CategoryModel]):
    """Repository for Category operations scoped to a user."""

    def __init__(self, session: Session) -> None:
        """Initialize repository with a database session.

        Args:
            session: SQLAlchemy Session instance
        """
        super().__init__(session, CategoryModel)

    def create(self, category_data: CategoryCreate, user_id: int) -> CategoryModel:
        """Create a new category owned by a user.

        Args:
            category_data: Category creation data
            user_id: Owning user ID

        Returns:
            Created CategoryModel instance
        """
        return self.add(CategoryModel(user_id=user_id, **category_data.model_dump()))

    def get_for_user(self, category_id: int, user_id: int) -> Optional[CategoryModel]:
        """Get a category only if it belongs to the user.

        Args:
            category_id: Category ID
            user_id: Owning user ID

        Returns:
            CategoryModel instance or None
        """
        return (
            self.session.query(CategoryModel)
            .filter(CategoryModel.id == category_id, CategoryModel.user_id == user_id)
            .first()
        )

    def get_by_name(self, name: str, user_id: int) -> Optional[CategoryModel]:
        """Get a user's category by name.

        Args:
            name: Category name
            user_id: Owning user ID

        Returns:
            CategoryModel instance or None
        """
        return (
            self.session.query(CategoryModel)
            .filter(CategoryModel.name == name, CategoryModel.user_id == user_id)
            .first()
        )

    def get_uncategorized(self, user_id: int) -> Optional[CategoryModel]:
        """Get the user's default category."""
        return self.get_by_name(UNCATEGORIZED, user_id)
