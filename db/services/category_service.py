"""
Service for category mutations.

Each method runs against one Unit of Work; the caller's ``with`` block
commits once, so every mutation is a single atomic storage call.
"""

import logging

from db.errors import NotFoundError, ValidationFailed
from db.models.models import Category
from db.repositories.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class CategoryService:
    """Create, rename and delete categories."""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    def _ensure_unique_name(self, name: str, category_id: int = None):
        existing = self.uow.categories.get_by_name(name)
        if existing is not None and existing.id != category_id:
            raise ValidationFailed(f"name: A category named '{name}' already exists.")

    def get(self, category_id: int) -> Category:
        category = self.uow.categories.get_by_id(category_id)
        if category is None:
            raise NotFoundError("Category", category_id)
        return category

    def create(self, name: str) -> Category:
        name = name.strip()
        self._ensure_unique_name(name)
        category = self.uow.categories.create(name=name)
        logger.info(f"Created category {category.id} '{name}'")
        return category

    def update(self, category_id: int, name: str) -> Category:
        name = name.strip()
        # Existence first: renaming a missing category is NotFound, not a clash
        self.get(category_id)
        self._ensure_unique_name(name, category_id)
        category = self.uow.categories.update(category_id, name=name)
        logger.info(f"Renamed category {category_id} to '{name}'")
        return category

    def delete(self, category_id: int) -> None:
        if not self.uow.categories.delete(category_id):
            raise NotFoundError("Category", category_id)
        logger.info(f"Deleted category {category_id}")
