"""
Generic repository with the CRUD operations shared by every model.
"""

from typing import Any, Generic, Optional, TypeVar

from sqlalchemy import asc, desc
from sqlalchemy.orm import Session

from syndication.models import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Base repository bound to one model class and one session."""

    def __init__(self, session: Session, model: type[ModelType]) -> None:
        """Initialize repository.

        Args:
            session: SQLAlchemy Session instance
            model: ORM model class managed by this repository
        """
        self.session = session
        self.model = model

    def list(
        self,
        limit: Optional[int] = None,
        offset: int = 0,
        order_by: str = "id",
        order_desc: bool = False,
        **filters: Any,
    ) -> list[ModelType]:
        """List rows matching equality filters.

        Args:
            limit: Maximum number of results (None for all)
            offset: Number of results to skip
            order_by: Column to order by
            order_desc: Sort in descending order
            **filters: Column equality filters

        Returns:
            List of model instances
        """
        query = self.session.query(self.model).filter_by(**filters)

        column = getattr(self.model, order_by)
        query = query.order_by(desc(column) if order_desc else asc(column))

        if offset:
            query = query.offset(offset)
        if limit is not None:
            query = query.limit(limit)

        return query.all()

    def count(self, **filters: Any) -> int:
        """Count rows matching equality filters.

        Args:
            **filters: Column equality filters

        Returns:
            Number of rows
        """
        return self.session.query(self.model).filter_by(**filters).count()

    def add(self, instance: ModelType) -> ModelType:
        """Persist a new instance and load its generated columns.

        Args:
            instance: Transient model instance

        Returns:
            The persisted instance
        """
        self.session.add(instance)
        self.session.flush()
        self.session.refresh(instance)
        return instance
