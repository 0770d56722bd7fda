"""Repository for operator accounts."""

from typing import Optional

from sqlalchemy.orm import Session

from db.models.models import User
from db.repositories.base_repository import BaseRepository, storage_errors


class UserRepository(BaseRepository[User]):
    """Repository for CRUD operations on users."""

    def __init__(self, session: Session):
        super().__init__(session, User)

    def get_by_username(self, username: str) -> Optional[User]:
        """Get a user by username."""
        with storage_errors("Load user"):
            return self.session.query(User).filter(User.username == username).first()
