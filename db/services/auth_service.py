"""
Service for operator registration and credential checks.

Passwords are stored as Werkzeug salted hashes; plaintext never reaches
the database.
"""

from typing import Optional
import logging

from werkzeug.security import generate_password_hash, check_password_hash

from db.errors import ValidationFailed
from db.models.models import User
from db.repositories.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    def register(self, username: str, password: str) -> User:
        username = username.strip()
        if self.uow.users.get_by_username(username) is not None:
            raise ValidationFailed(f"username: '{username}' is already taken.")
        user = self.uow.users.create(
            username=username,
            password_hash=generate_password_hash(password)
        )
        logger.info(f"Registered user {user.id}")
        return user

    def authenticate(self, username: str, password: str) -> Optional[User]:
        """Return the user when the credentials match, otherwise None."""
        user = self.uow.users.get_by_username(username.strip())
        if user is None or not check_password_hash(user.password_hash, password):
            logger.warning("Failed login attempt")
            return None
        return user
