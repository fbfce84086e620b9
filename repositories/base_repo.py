"""
repositories/base_repo.py
-------------------------
Shared CRUD plumbing for the table repositories.

Subclasses declare their table, alias, columns and the joins they can
eagerly load; this module turns those declarations into SQL.
"""

import sqlite3
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Optional, Sequence

from db.connection import Database
from repositories.errors import PersistenceError, RecordNotFoundError
from repositories.filters import build_where
from utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class Join:
    """
    A related table that can be fetched alongside the main one.

    Attributes:
        alias: SQL alias, also the prefix of the selected columns.
        table: Related table name.
        on: Join condition.
        columns: Related columns to select (id included).
    """
    alias: str
    table: str
    on: str
    columns: tuple

    def select_sql(self) -> str:
        return ", ".join(f"{self.alias}.{c} AS {self.alias}__{c}" for c in self.columns)

    def join_sql(self) -> str:
        return f" LEFT JOIN {self.table} {self.alias} ON {self.on}"

    def extract(self, row: sqlite3.Row) -> Optional[dict]:
        """Related values of a row, or None when the join found nothing."""
        if row[f"{self.alias}__id"] is None:
            return None
        return {c: row[f"{self.alias}__{c}"] for c in self.columns}


class BaseRepository:
    """CRUD operations shared by every table repository."""

    TABLE: str = ""
    ALIAS: str = ""
    COLUMNS: tuple = ()

    def __init__(self, db: Database):
        self.db = db

    # ── Hooks ─────────────────────────────────────────────

    def _to_row(self, model) -> dict:
        """Map a model to its column values (id excluded)."""
        return {c: self._field_to_db(c, getattr(model, c)) for c in self.COLUMNS}

    def _row_to_model(self, row: sqlite3.Row, joins: Sequence[Join] = ()):
        raise NotImplementedError

    def _field_to_db(self, field: str, value: Any) -> Any:
        """Convert a single field value before it is written."""
        return value

    # ── CREATE ────────────────────────────────────────────

    def add(self, model):
        """
        Insert a new record.

        Returns:
            The same model with its `id` populated.
        """
        return self.add_many([model])[0]

    def add_many(self, models: Sequence) -> list:
        """
        Insert several records in a single transaction.
        Nothing is inserted when any of them fails.

        Returns:
            The given models with their `id` populated.
        """
        sql = (
            f"INSERT INTO {self.TABLE} ({', '.join(self.COLUMNS)}) "
            f"VALUES ({', '.join('?' for _ in self.COLUMNS)});"
        )
        conn = self.db.get_connection()
        try:
            ids = []
            for model in models:
                row = self._to_row(model)
                cur = conn.execute(sql, [row[c] for c in self.COLUMNS])
                ids.append(cur.lastrowid)
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            logger.error(f"Failed to add {len(models)} record(s) to {self.TABLE}: {e}")
            raise PersistenceError(f"Insert into {self.TABLE} failed: {e}") from e

        for model, new_id in zip(models, ids):
            model.id = new_id
        logger.info(f"Added {len(ids)} record(s) to {self.TABLE}")
        return list(models)

    # ── READ ──────────────────────────────────────────────

    def _select(self, sql: str, params: Iterable) -> list[sqlite3.Row]:
        conn = self.db.get_connection()
        try:
            return conn.execute(sql, list(params)).fetchall()
        except sqlite3.Error as e:
            logger.error(f"Query on {self.TABLE} failed: {e}")
            raise PersistenceError(f"Query on {self.TABLE} failed: {e}") from e

    def find(
        self,
        criteria: Optional[Mapping[str, Any]] = None,
        page: int = 0,
        limit: Optional[int] = None,
        order_by: Optional[str] = None,
        joins: Sequence[Join] = (),
    ) -> list:
        """
        Fetch records matching the criteria.

        Args:
            criteria: field -> value mapping, see repositories.filters.
            page: Zero-based page index, only used with `limit`.
            limit: Maximum number of records returned.
            order_by: Field to sort by (ascending); defaults to id.
            joins: Related tables to load alongside each record.

        Returns:
            List of model objects.
        """
        fields = ("id",) + self.COLUMNS
        where, params = build_where(criteria, fields, self.ALIAS)

        order_field = order_by or "id"
        if order_field not in fields:
            raise ValueError(f"Cannot order {self.TABLE} by {order_field}")

        select = f"{self.ALIAS}.*"
        if joins:
            select += ", " + ", ".join(j.select_sql() for j in joins)
        sql = f"SELECT {select} FROM {self.TABLE} {self.ALIAS}"
        sql += "".join(j.join_sql() for j in joins)
        sql += where
        sql += f" ORDER BY {self.ALIAS}.{order_field}"
        if order_field != "id":
            sql += f", {self.ALIAS}.id"
        if limit is not None:
            sql += " LIMIT ? OFFSET ?"
            params = params + [limit, max(page, 0) * limit]

        return [self._row_to_model(r, joins) for r in self._select(sql, params)]

    def count(self, criteria: Optional[Mapping[str, Any]] = None) -> int:
        """Count records matching the criteria."""
        where, params = build_where(criteria, ("id",) + self.COLUMNS, self.ALIAS)
        sql = f"SELECT COUNT(*) FROM {self.TABLE} {self.ALIAS}{where}"
        return self._select(sql, params)[0][0]

    def get_by_id(self, record_id: int, joins: Sequence[Join] = ()):
        """
        Fetch a single record by ID.

        Returns:
            A model object or None if not found.
        """
        found = self.find({"id": record_id}, joins=joins)
        return found[0] if found else None

    # ── UPDATE ────────────────────────────────────────────

    def update(self, record_id: int, fields: Mapping[str, Any]) -> None:
        """
        Update only the given fields of a record.

        Raises:
            RecordNotFoundError: If no record has this id.
            PersistenceError: On any storage failure.
            ValueError: If a field is not a column of the table.
        """
        unknown = [f for f in fields if f not in self.COLUMNS]
        if unknown:
            raise ValueError(f"Unknown {self.TABLE} field(s): {', '.join(unknown)}")
        if not fields:
            if self.get_by_id(record_id) is None:
                raise RecordNotFoundError(f"{self.TABLE} #{record_id} not found")
            return

        assignments = ", ".join(f"{f} = ?" for f in fields)
        params = [self._field_to_db(f, v) for f, v in fields.items()]
        sql = f"UPDATE {self.TABLE} SET {assignments} WHERE id = ?;"

        conn = self.db.get_connection()
        try:
            cur = conn.execute(sql, params + [record_id])
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            logger.error(f"Failed to update {self.TABLE} #{record_id}: {e}")
            raise PersistenceError(f"Update of {self.TABLE} #{record_id} failed: {e}") from e

        if cur.rowcount == 0:
            raise RecordNotFoundError(f"{self.TABLE} #{record_id} not found")
        logger.info(f"Updated {self.TABLE} #{record_id}: {', '.join(fields)}")

    # ── DELETE ────────────────────────────────────────────

    def delete(self, record_ids: Sequence[int]) -> int:
        """
        Delete records by ID.

        Returns:
            Number of deleted rows.
        """
        if not record_ids:
            return 0
        placeholders = ", ".join("?" for _ in record_ids)
        sql = f"DELETE FROM {self.TABLE} WHERE id IN ({placeholders});"
        conn = self.db.get_connection()
        try:
            cur = conn.execute(sql, list(record_ids))
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            logger.error(f"Failed to delete from {self.TABLE}: {e}")
            raise PersistenceError(f"Delete from {self.TABLE} failed: {e}") from e
        logger.info(f"Deleted {cur.rowcount} record(s) from {self.TABLE}")
        return cur.rowcount
