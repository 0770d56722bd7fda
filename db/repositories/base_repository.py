"""
Base repository with common CRUD and listing operations.

Every query runs inside ``storage_errors`` so that SQLAlchemy failures
surface as ``StorageError`` instead of leaking driver exceptions.
"""

from contextlib import contextmanager
from typing import Generic, TypeVar, Optional, List, Any
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, Query

from db.errors import StorageError

T = TypeVar('T')

logger = logging.getLogger(__name__)


@contextmanager
def storage_errors(operation: str):
    """Translate SQLAlchemy failures raised inside the block into StorageError."""
    try:
        yield
    except SQLAlchemyError as e:
        logger.error(f"{operation} failed: {e}")
        raise StorageError(f"{operation} failed", original_error=e) from e


class BaseRepository(Generic[T]):
    """Base repository with common CRUD operations and offset/limit listing."""

    def __init__(self, session: Session, model_class: type):
        self.session = session
        self.model_class = model_class

    @property
    def entity_name(self) -> str:
        return self.model_class.__name__

    def _scoped_query(self, filter_key: Optional[Any] = None) -> Query:
        """Query narrowed to ``filter_key``. Unscoped by default."""
        return self.session.query(self.model_class)

    def create(self, **kwargs) -> T:
        """Create a new entity."""
        with storage_errors(f"Create {self.entity_name}"):
            entity = self.model_class(**kwargs)
            self.session.add(entity)
            self.session.flush()  # Ensure ID is generated
            return entity

    def get_by_id(self, entity_id: int) -> Optional[T]:
        """Get entity by ID."""
        with storage_errors(f"Load {self.entity_name} {entity_id}"):
            return self.session.get(self.model_class, entity_id)

    def get_all(self) -> List[T]:
        """Get all entities ordered by ID."""
        with storage_errors(f"List {self.entity_name}"):
            return self.session.query(self.model_class).order_by(self.model_class.id).all()

    def update(self, entity_id: int, **kwargs) -> Optional[T]:
        """Update entity by ID. Returns None when the row does not exist."""
        entity = self.get_by_id(entity_id)
        if entity:
            with storage_errors(f"Update {self.entity_name} {entity_id}"):
                for key, value in kwargs.items():
                    if hasattr(entity, key):
                        setattr(entity, key, value)
                self.session.flush()
        return entity

    def delete(self, entity_id: int) -> bool:
        """Delete entity by ID."""
        entity = self.get_by_id(entity_id)
        if entity:
            with storage_errors(f"Delete {self.entity_name} {entity_id}"):
                self.session.delete(entity)
                self.session.flush()
            return True
        return False

    def count(self, filter_key: Optional[Any] = None) -> int:
        """Count entities in the scope selected by ``filter_key``."""
        with storage_errors(f"Count {self.entity_name}"):
            return self._scoped_query(filter_key).count()

    def fetch_slice(self, filter_key: Optional[Any], offset: int, limit: int) -> List[T]:
        """Return one window of the scope, ordered by ID for stable paging."""
        with storage_errors(f"Fetch {self.entity_name} slice"):
            return self._scoped_query(filter_key)\
                .order_by(self.model_class.id)\
                .offset(offset)\
                .limit(limit)\
                .all()
