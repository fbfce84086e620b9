"""
models/user.py
--------------
Domain model for registry users.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class User:
    """
    Represents a user allowed to log into the registry.

    Attributes:
        username: Unique login name.
        password: bcrypt hash or plain text, depending on
            SECURITY_PASSWORD_ENCRYPT. None once it has been stripped
            from an authenticated user.
        is_admin: Whether the user has administrative rights.
        id: Database primary key (None for new records).
    """
    username: str
    password: Optional[str] = None
    is_admin: bool = False
    id: Optional[int] = None

    def __str__(self) -> str:
        return self.username
