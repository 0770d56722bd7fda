"""
Repository for post operations.
"""

from typing import List, Optional

from sqlalchemy.orm import Session, Query, selectinload

from db.models.models import Post
from db.repositories.base_repository import BaseRepository, storage_errors


class PostRepository(BaseRepository[Post]):
    """Repository for post operations.

    The listing scope (``filter_key``) is a category ID; ``None`` lists
    every post.
    """

    def __init__(self, session: Session):
        super().__init__(session, Post)

    def _scoped_query(self, filter_key: Optional[int] = None) -> Query:
        query = self.session.query(Post)
        if filter_key is not None:
            query = query.filter(Post.category_id == filter_key)
        return query

    def fetch_slice(self, filter_key: Optional[int], offset: int, limit: int) -> List[Post]:
        # Category is rendered after the session closes, so load it eagerly
        with storage_errors("Fetch Post slice"):
            return self._scoped_query(filter_key)\
                .options(selectinload(Post.category))\
                .order_by(Post.id)\
                .offset(offset)\
                .limit(limit)\
                .all()

    def get_with_category(self, post_id: int) -> Optional[Post]:
        """Get a post with its category loaded."""
        with storage_errors(f"Load Post {post_id}"):
            return self.session.query(Post)\
                .options(selectinload(Post.category))\
                .filter(Post.id == post_id)\
                .first()
