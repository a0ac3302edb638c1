"""
User repository for database operations.
"""

from typing import Optional

from sqlalchemy.orm import Session

from syndication.models import UNCATEGORIZED, CategoryModel, UserCreate, UserModel
from syndication.storage.repositories.base import BaseRepository


class UserRepository(BaseRepository[UserModel]):
    """Repository for User operations."""

    def __init__(self, session: Session) -> None:
        """Initialize repository with a database session.

        Args:
            session: SQLAlchemy Session instance
        """
        super().__init__(session, UserModel)

    def create(self, user_data: UserCreate) -> UserModel:
        """Create a new user together with its uncategorized category.

        Args:
            user_data: User creation data

        Returns:
            Created UserModel instance
        """
        user = self.add(UserModel(**user_data.model_dump()))
        self.session.add(CategoryModel(user_id=user.id, name=UNCATEGORIZED))
        self.session.flush()
        return user

    def get_by_username(self, username: str) -> Optional[UserModel]:
        """Get a user by username.

        Args:
            username: Login name

        Returns:
            UserModel instance or None
        """
        return self.session.query(UserModel).filter(UserModel.username == username).first()

    def list_all(self) -> list[UserModel]:
        """List every registered user ordered by id."""
        return self.list()
