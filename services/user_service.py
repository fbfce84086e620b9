"""
services/user_service.py
-------------------------
User accounts: creation with optional password hashing, and authentication.
"""

from typing import Optional

from config import SECURITY_PASSWORD_ENCRYPT
from db.connection import Database
from models.user import User
from repositories.errors import InvalidRecordError, RegistryError
from repositories.user_repo import UserRepository
from security.auth import hash_password, verify_password
from services.base_service import EntityService, to_plain
from utils.logger import get_logger

logger = get_logger(__name__)


class UserService(EntityService):
    """
    Manages registry users.

    Args:
        db: Open storage handle.
        encrypt_passwords: Store bcrypt hashes instead of plain text;
            defaults to SECURITY_PASSWORD_ENCRYPT.
    """

    MODEL = User
    REPOSITORY = UserRepository

    def __init__(self, db: Database, encrypt_passwords: Optional[bool] = None):
        super().__init__(db)
        self.encrypt_passwords = (
            SECURITY_PASSWORD_ENCRYPT if encrypt_passwords is None else encrypt_passwords
        )

    def _prepare(self, model: User) -> User:
        if not (model.password or "").strip():
            raise InvalidRecordError("A user needs a non-empty password")
        if self.encrypt_passwords:
            model.password = hash_password(model.password)
        return model

    def update(self, data, *, throw_on_error: bool = False) -> bool:
        """EntityService.update, applying the password rules of `create` to a new password."""
        values = dict(data)
        if "password" in values:
            if not (values["password"] or "").strip():
                self._fail("update", InvalidRecordError("A user needs a non-empty password"), throw_on_error)
                return False
            if self.encrypt_passwords:
                values["password"] = hash_password(values["password"])
        return super().update(values, throw_on_error=throw_on_error)

    def authenticate(self, username: str, password: str, *, return_plain: bool = False, throw_on_error: bool = False):
        """
        Check the credentials of a user.

        Returns:
            The user (password stripped) when the credentials match,
            None otherwise.
        """
        try:
            user = self.repo.get_by_username(username)
        except RegistryError as e:
            self._fail("authenticate", e, throw_on_error)
            return None

        if user is None or not verify_password(password, user.password, self.encrypt_passwords):
            logger.warning(f"Failed login attempt for username={username!r}")
            return None

        user.password = None
        logger.info(f"User {user.username} logged in")
        return to_plain(user) if return_plain else user
