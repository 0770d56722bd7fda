"""
Repository for category operations.
"""

from typing import Optional

from sqlalchemy.orm import Session

from db.models.models import Category
from db.repositories.base_repository import BaseRepository, storage_errors


class CategoryRepository(BaseRepository[Category]):
    """Repository for category operations."""

    def __init__(self, session: Session):
        super().__init__(session, Category)

    def get_by_name(self, name: str) -> Optional[Category]:
        """Get a category by its exact name."""
        with storage_errors(f"Load category '{name}'"):
            return self.session.query(Category).filter(Category.name == name).first()

    def get_all_ordered(self) -> list[Category]:
        """All categories by name, for navigation menus and select boxes."""
        with storage_errors("List categories"):
            return self.session.query(Category).order_by(Category.name, Category.id).all()
