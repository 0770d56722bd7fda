"""Service for post mutations."""

from typing import Optional
import logging

from db.errors import NotFoundError, ValidationFailed
from db.models.models import Post
from db.repositories.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class PostService:
    """Create, edit and delete posts."""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    def _check_category(self, category_id: Optional[int]):
        if category_id is not None and self.uow.categories.get_by_id(category_id) is None:
            raise ValidationFailed(f"category_id: Category {category_id} does not exist.")

    def get(self, post_id: int) -> Post:
        post = self.uow.posts.get_with_category(post_id)
        if post is None:
            raise NotFoundError("Post", post_id)
        return post

    def count_in_category(self, category_id: int) -> int:
        return self.uow.posts.count(category_id)

    def create(self, title: str, description: str, category_id: Optional[int] = None) -> Post:
        self._check_category(category_id)
        post = self.uow.posts.create(
            title=title.strip(),
            description=description,
            category_id=category_id
        )
        logger.info(f"Created post {post.id}")
        return post

    def update(self, post_id: int, title: str, description: str,
               category_id: Optional[int] = None) -> Post:
        self.get(post_id)
        self._check_category(category_id)
        post = self.uow.posts.update(
            post_id,
            title=title.strip(),
            description=description,
            category_id=category_id
        )
        logger.info(f"Updated post {post_id}")
        return post

    def delete(self, post_id: int) -> None:
        if not self.uow.posts.delete(post_id):
            raise NotFoundError("Post", post_id)
        logger.info(f"Deleted post {post_id}")
