"""
Database connection and session management.
"""

from contextlib import contextmanager
from typing import Generator, Optional

from sqlalchemy import Engine, create_engine, event
from sqlalchemy.engine import make_url
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from syndication.config import DatabaseConfig, get_config
from syndication.logger import get_logger
from syndication.models import Base

logger = get_logger(__name__)


def build_url(db_config: DatabaseConfig) -> str:
    """Build the SQLAlchemy URL for a database configuration.

    Args:
        db_config: Database configuration

    Returns:
        SQLAlchemy URL string
    """
    if db_config.url:
        return db_config.url

    if db_config.path.startswith("sqlite://"):
        return db_config.path

    if db_config.path == ":memory:":
        return "sqlite://"

    return f"sqlite:///{db_config.path}"


def create_db_engine(db_config: DatabaseConfig) -> Engine:
    """Create an engine for the given configuration.

    SQLite connections get foreign keys enabled. An in-memory SQLite
    database is shared by every thread through a single connection.

    Args:
        db_config: Database configuration

    Returns:
        SQLAlchemy Engine instance
    """
    url = make_url(build_url(db_config))
    engine_kwargs: dict = {"echo": db_config.echo}

    if url.get_backend_name() == "sqlite":
        engine_kwargs["connect_args"] = {"check_same_thread": False, "timeout": 30}
        if not url.database or url.database == ":memory:":
            engine_kwargs["poolclass"] = StaticPool

    engine = create_engine(url, **engine_kwargs)

    if url.get_backend_name() == "sqlite":
        @event.listens_for(engine, "connect")
        def set_sqlite_pragma(dbapi_conn, connection_record):
            cursor = dbapi_conn.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


class DatabaseManager:
    """Database manager for context-managed database operations."""

    def __init__(self, db_path: Optional[str] = None, db_config: Optional[DatabaseConfig] = None):
        """Initialize database manager.

        Args:
            db_path: Optional SQLite database path (":memory:" for an in-memory database)
            db_config: Optional custom database configuration

        Note:
            If neither db_path nor db_config is provided, uses the global config.
        """
        if db_config is None:
            db_config = DatabaseConfig(path=db_path) if db_path else get_config().database

        self.db_config = db_config
        self._engine: Optional[Engine] = None
        self._session_factory: Optional[sessionmaker] = None

    @property
    def engine(self) -> Engine:
        """Get the database engine."""
        if self._engine is None:
            self._engine = create_db_engine(self.db_config)
        return self._engine

    @property
    def session_factory(self) -> sessionmaker:
        """Get the session factory bound to this manager's engine."""
        if self._session_factory is None:
            # Rows handed to the sync engine outlive the session that loaded them
            self._session_factory = sessionmaker(
                autoflush=False,
                expire_on_commit=False,
                bind=self.engine,
            )
        return self._session_factory

    def init_db(self, drop_all: bool = False) -> None:
        """Initialize database tables.

        Args:
            drop_all: If True, drop existing tables first
        """
        if drop_all:
            logger.warning("Dropping all tables - data will be lost!")
            Base.metadata.drop_all(bind=self.engine)

        Base.metadata.create_all(bind=self.engine)

    @contextmanager
    def session(self) -> Generator[Session, None, None]:
        """Get a database session.

        Commits on success, rolls back on any exception.

        Yields:
            SQLAlchemy Session instance

        Example:
            >>> with manager.session() as session:
            ...     feeds = session.query(FeedModel).all()
        """
        session = self.session_factory()

        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def close(self) -> None:
        """Close database connections."""
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
        self._session_factory = None

    def __enter__(self) -> "DatabaseManager":
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.close()
