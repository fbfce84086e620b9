"""
repositories/filters.py
-----------------------
Filter expressions used to build WHERE clauses.

Each filter type renders itself to an SQL fragment plus its parameters for a
given column expression. `parse_criterion` turns the loose values typed by a
user in a filter screen (wildcards, sentinel tokens, lists) into one of these
types; `build_where` combines a whole criteria mapping.
"""

import re
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Optional

SEARCH_EMPTY = "<empty>"
SEARCH_NULL = "<null>"

_LIKE_ESCAPE = "\\"
_NUMERAL = re.compile(r"[+-]?\d+(\.\d+)?")


def _escape_like(text: str) -> str:
    return (
        text.replace(_LIKE_ESCAPE, _LIKE_ESCAPE * 2)
        .replace("%", _LIKE_ESCAPE + "%")
        .replace("_", _LIKE_ESCAPE + "_")
    )


class FilterExpression:
    """Base class of every filter expression."""

    def to_sql(self, column: str) -> tuple[str, list]:
        raise NotImplementedError


@dataclass(frozen=True)
class Equals(FilterExpression):
    """Exact match; strings compare case-insensitively unless `exact`."""
    value: Any
    exact: bool = False

    def to_sql(self, column: str) -> tuple[str, list]:
        if isinstance(self.value, str) and not self.exact:
            return f"lower({column}) = lower(?)", [self.value]
        return f"{column} = ?", [self.value]


@dataclass(frozen=True)
class Contains(FilterExpression):
    """Case-insensitive substring match."""
    text: str

    def to_sql(self, column: str) -> tuple[str, list]:
        pattern = f"%{_escape_like(self.text)}%"
        return f"lower({column}) LIKE lower(?) ESCAPE '{_LIKE_ESCAPE}'", [pattern]


@dataclass(frozen=True)
class Like(FilterExpression):
    """Case-insensitive SQL LIKE pattern; `%` stays a wildcard, `_` is literal."""
    pattern: str

    def to_sql(self, column: str) -> tuple[str, list]:
        literal = self.pattern.replace(_LIKE_ESCAPE, _LIKE_ESCAPE * 2).replace("_", _LIKE_ESCAPE + "_")
        return f"lower({column}) LIKE lower(?) ESCAPE '{_LIKE_ESCAPE}'", [literal]


@dataclass(frozen=True)
class OneOf(FilterExpression):
    """Value is one of the given values."""
    values: tuple

    def to_sql(self, column: str) -> tuple[str, list]:
        if not self.values:
            # IN () is invalid SQL; nothing can match an empty set
            return "0 = 1", []
        placeholders = ", ".join("?" for _ in self.values)
        return f"{column} IN ({placeholders})", list(self.values)


@dataclass(frozen=True)
class IsNull(FilterExpression):

    def to_sql(self, column: str) -> tuple[str, list]:
        return f"{column} IS NULL", []


@dataclass(frozen=True)
class IsEmpty(FilterExpression):

    def to_sql(self, column: str) -> tuple[str, list]:
        return f"{column} = ''", []


def _is_numeric(text: str) -> bool:
    # plain numerals only, no "nan", "inf" or "1_000"
    return _NUMERAL.fullmatch(text) is not None


def parse_criterion(value: Any) -> Optional[FilterExpression]:
    """
    Convert a user-facing filter value into a filter expression.

    Rules:
        - None                     -> no filter (None is returned)
        - FilterExpression         -> used as is
        - "<empty>" / "<null>"     -> IsEmpty / IsNull
        - "%text%"                 -> Contains("text")
        - "text%" or "%text"       -> Like (prefix / suffix match)
        - list, tuple or set       -> OneOf
        - numeric-looking string   -> exact Equals
        - other strings            -> case-insensitive Equals
        - anything else            -> exact Equals
    """
    if value is None:
        return None
    if isinstance(value, FilterExpression):
        return value
    if isinstance(value, (list, tuple, set, frozenset)):
        return OneOf(tuple(value))
    if isinstance(value, str):
        if value == SEARCH_EMPTY:
            return IsEmpty()
        if value == SEARCH_NULL:
            return IsNull()
        if len(value) > 1 and value.startswith("%") and value.endswith("%"):
            return Contains(value[1:-1])
        if value.startswith("%") or value.endswith("%"):
            return Like(value)
        if _is_numeric(value.strip()):
            return Equals(value.strip(), exact=True)
        return Equals(value)
    return Equals(value, exact=True)


def build_where(
    criteria: Optional[Mapping[str, Any]],
    columns: Iterable[str],
    alias: str = "",
) -> tuple[str, list]:
    """
    Build a WHERE clause from a criteria mapping.

    Args:
        criteria: field -> value (or FilterExpression). None values are skipped.
        columns: Fields allowed in the clause.
        alias: Optional table alias used to qualify the columns.

    Returns:
        (sql, params) where sql is "" when there is nothing to filter on,
        otherwise starts with " WHERE ".

    Raises:
        ValueError: If criteria references an unknown field.
    """
    if not criteria:
        return "", []

    allowed = set(columns)
    prefix = f"{alias}." if alias else ""
    clauses: list[str] = []
    params: list = []
    for field, value in criteria.items():
        if field not in allowed:
            raise ValueError(f"Unknown filter field: {field}")
        expression = parse_criterion(value)
        if expression is None:
            continue
        sql, values = expression.to_sql(f"{prefix}{field}")
        clauses.append(sql)
        params.extend(values)

    if not clauses:
        return "", []
    return " WHERE " + " AND ".join(clauses), params
