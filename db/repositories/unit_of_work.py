"""
Unit of Work pattern implementation for managing transactions and repository instances.
"""

from contextlib import contextmanager
from typing import Optional
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from db.errors import StorageError
from db.repositories.category_repository import CategoryRepository
from db.repositories.post_repository import PostRepository
from db.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)


class UnitOfWork:
    """
    Unit of Work pattern implementation that manages a database session
    and provides access to all repositories within a single transaction.

    Either ``session`` (tests) or ``session_factory`` (application) must be
    supplied.
    """

    def __init__(self, session: Optional[Session] = None,
                 session_factory: Optional[sessionmaker] = None):
        if session is None and session_factory is None:
            raise ValueError("UnitOfWork needs a session or a session_factory")
        self._session = session
        self._session_factory = session_factory
        self._owns_session = session is None
        self._categories: Optional[CategoryRepository] = None
        self._posts: Optional[PostRepository] = None
        self._users: Optional[UserRepository] = None

    @property
    def session(self) -> Session:
        """Get the database session, creating one if needed."""
        if self._session is None:
            self._session = self._session_factory()
        return self._session

    @property
    def categories(self) -> CategoryRepository:
        """Get the categories repository."""
        if self._categories is None:
            self._categories = CategoryRepository(self.session)
        return self._categories

    @property
    def posts(self) -> PostRepository:
        """Get the posts repository."""
        if self._posts is None:
            self._posts = PostRepository(self.session)
        return self._posts

    @property
    def users(self) -> UserRepository:
        """Get the users repository."""
        if self._users is None:
            self._users = UserRepository(self.session)
        return self._users

    def commit(self):
        """Commit the current transaction."""
        try:
            self.session.commit()
            logger.debug("Transaction committed successfully")
        except SQLAlchemyError as e:
            logger.error(f"Transaction commit failed: {e}")
            self.session.rollback()
            raise StorageError("Commit failed", original_error=e) from e

    def rollback(self):
        """Rollback the current transaction."""
        if self._session is not None:
            self._session.rollback()
            logger.debug("Transaction rolled back")

    def close(self):
        """Close the session if we own it."""
        if self._owns_session and self._session:
            self._session.close()
            self._session = None
            logger.debug("Database session closed")

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit with automatic transaction management."""
        try:
            if exc_type is not None:
                logger.warning(f"Exception in UnitOfWork context: {exc_type.__name__}: {exc_val}")
                self.rollback()
            else:
                self.commit()
        finally:
            self.close()


@contextmanager
def get_unit_of_work(session_factory: sessionmaker):
    """Context manager for creating a Unit of Work with automatic cleanup."""
    uow = UnitOfWork(session_factory=session_factory)
    try:
        yield uow
        # If we get here without exception, commit
        uow.commit()
    except Exception as e:
        logger.error(f"Exception in Unit of Work: {e}")
        uow.rollback()
        raise
    finally:
        # Always close
        uow.close()
