"""
repositories/user_repo.py
--------------------------
Data access layer for user records.
"""

import sqlite3
from typing import Any, Optional, Sequence

from models.user import User
from repositories.base_repo import BaseRepository, Join


class UserRepository(BaseRepository):
    """Repository for CRUD operations on the users table."""

    TABLE = "users"
    ALIAS = "u"
    COLUMNS = ("username", "password", "is_admin")

    def _field_to_db(self, field: str, value: Any) -> Any:
        if field == "is_admin":
            return int(bool(value))
        return value

    def _row_to_model(self, row: sqlite3.Row, joins: Sequence[Join] = ()) -> User:
        return User(
            id=row["id"],
            username=row["username"],
            password=row["password"],
            is_admin=bool(row["is_admin"]),
        )

    def get_by_username(self, username: str) -> Optional[User]:
        """
        Fetch a user by their exact username.

        Returns:
            User or None.
        """
        rows = self._select(
            "SELECT * FROM users WHERE username = ?;", (username,)
        )
        return self._row_to_model(rows[0]) if rows else None
