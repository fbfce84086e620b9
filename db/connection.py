"""
db/connection.py
----------------
Manages the SQLite storage handle.
A single `Database` is constructed by the entry point, opened once and
passed to every repository and service that needs it.
"""

import sqlite3
from typing import Optional

from utils.logger import get_logger

logger = get_logger(__name__)


class Database:
    """
    Explicit handle around one SQLite connection.

    Usage:
        db = Database("registry.sqlite")
        db.open()
        ...
        db.close()

    or as a context manager:
        with Database("registry.sqlite") as db:
            ...
    """

    def __init__(self, path: str):
        self.path = path
        self._conn: Optional[sqlite3.Connection] = None

    def open(self) -> "Database":
        """
        Open the connection (no-op when already open).

        Raises:
            sqlite3.OperationalError: If the storage file cannot be opened.
        """
        if self._conn is not None:
            return self
        try:
            self._conn = sqlite3.connect(self.path)
            self._conn.row_factory = sqlite3.Row
            self._conn.execute("PRAGMA foreign_keys = ON;")
            logger.info(f"Database opened at {self.path}.")
        except sqlite3.OperationalError as e:
            logger.error(f"Failed to open database {self.path}: {e}")
            raise
        return self

    def get_connection(self) -> sqlite3.Connection:
        """
        Get the open connection.

        Raises:
            RuntimeError: If the database has not been opened.
        """
        if self._conn is None:
            raise RuntimeError("Database not opened. Call open() first.")
        return self._conn

    @property
    def is_open(self) -> bool:
        return self._conn is not None

    def close(self) -> None:
        """Close the connection."""
        if self._conn is not None:
            self._conn.close()
            self._conn = None
            logger.info("Database connection closed.")

    def __enter__(self) -> "Database":
        return self.open()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
