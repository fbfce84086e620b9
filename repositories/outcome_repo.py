"""
repositories/outcome_repo.py
-----------------------------
Data access layer for outcome types and subtypes.
"""

import sqlite3
from typing import Any, Sequence

from models.outcome import Outcome
from repositories.base_repo import BaseRepository, Join


class OutcomeRepository(BaseRepository):
    """Repository for CRUD operations on the outcomes table."""

    TABLE = "outcomes"
    ALIAS = "o"
    COLUMNS = ("name", "is_subtype")

    def _field_to_db(self, field: str, value: Any) -> Any:
        if field == "is_subtype":
            return int(bool(value))
        return value

    def _row_to_model(self, row: sqlite3.Row, joins: Sequence[Join] = ()) -> Outcome:
        return Outcome(id=row["id"], name=row["name"], is_subtype=bool(row["is_subtype"]))
