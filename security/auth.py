"""
security/auth.py
-----------------
Password hashing and login enforcement for the registry.

Passwords are stored as bcrypt hashes when SECURITY_PASSWORD_ENCRYPT is
enabled, and as plain text otherwise.
"""

from functools import wraps
from typing import Callable

import bcrypt

from config import BCRYPT_ROUNDS
from utils.display import Alert
from utils.logger import get_logger

logger = get_logger(__name__)


def hash_password(password: str, rounds: int = BCRYPT_ROUNDS) -> str:
    """Hash a password with a fresh bcrypt salt."""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds)).decode("utf-8")


def verify_password(password: str, stored: str, encrypted: bool) -> bool:
    """
    Check a password against the stored value.

    Args:
        password: Password typed by the user.
        stored: Value from the users table.
        encrypted: Whether `stored` is a bcrypt hash.
    """
    if not encrypted:
        return password == stored
    try:
        return bcrypt.checkpw(password.encode("utf-8"), stored.encode("utf-8"))
    except ValueError:
        # stored value is not a bcrypt hash (e.g. created before encryption was enabled)
        logger.warning("Stored password is not a valid bcrypt hash.")
        return False


def login_required(func: Callable):
    """
    Decorator that restricts a System method to a logged-in session.

    Usage:
        class System:
            @login_required
            def handle_animal_add(self):
                ...

    Behavior:
        - If `self.user` is set, the method runs normally.
        - Otherwise an error alert is shown, the attempt is logged
          and None is returned.
    """
    @wraps(func)
    def wrapper(self, *args, **kwargs):
        if self.user is None:
            logger.warning(f"Blocked {func.__name__}: no user logged in")
            Alert.error("You must be logged in to use this option.")
            return None
        return func(self, *args, **kwargs)

    return wrapper
