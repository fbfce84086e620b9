"""
utils/display.py
----------------
Tabular display helpers and boxed alert messages.

A table is described by a list of DisplayColumn objects. Each column pulls
one or more dot-path values out of a record (model or dict), optionally
transforms them, and falls back to a placeholder when nothing was found.
"""

import textwrap
from dataclasses import dataclass
from typing import Any, Callable, Optional, Sequence, Union

from tabulate import tabulate

ALERT_WIDTH = 50


def resolve_path(record: Any, path: str, default: Any = "") -> Any:
    """
    Follow a dot-separated path through dicts and object attributes.

    Example:
        resolve_path(animal, "species.name") -> "Dog"
    """
    value = record
    for part in path.split("."):
        if value is None:
            return default
        if isinstance(value, dict):
            value = value.get(part)
        else:
            value = getattr(value, part, None)
    return default if value is None else value


def _is_empty(value: Any) -> bool:
    return value is None or value == ""


@dataclass
class DisplayColumn:
    """
    Definition of one output column.

    Attributes:
        label: Header text.
        paths: One dot-path, or several; several paths hand a list of
            values to the transform.
        transform: Optional function turning the extracted value(s) into text.
        align: "left", "center" or "right".
        default: Placeholder shown when the extracted value(s) are empty.
    """
    label: str
    paths: Union[str, Sequence[str]]
    transform: Optional[Callable[[Any], Any]] = None
    align: str = "left"
    default: Optional[str] = None

    def extract(self, record: Any) -> Any:
        if isinstance(self.paths, str):
            return resolve_path(record, self.paths)
        return [resolve_path(record, p) for p in self.paths]

    def is_empty(self, value: Any) -> bool:
        if isinstance(value, list):
            return all(_is_empty(v) for v in value)
        return _is_empty(value)

    def render(self, record: Any, raw: bool = False) -> Any:
        """
        Cell value for a record. With `raw` the extracted value is returned
        untouched (no transform, no placeholder).
        """
        value = self.extract(record)
        if raw:
            return value
        if self.default is not None and self.is_empty(value):
            return self.default
        if self.transform is not None:
            value = self.transform(value)
        return "" if value is None else value


def display_header(columns: Sequence[DisplayColumn]) -> list[str]:
    return [c.label for c in columns]


def display_record(record: Any, columns: Sequence[DisplayColumn], raw: bool = False) -> list:
    return [c.render(record, raw) for c in columns]


def display_table(
    records: Sequence[Any],
    columns: Sequence[DisplayColumn],
    include_header: bool = True,
    raw: bool = False,
) -> Union[str, list[list]]:
    """
    Build a table for the given records.

    Returns:
        The rendered table text, or the raw rows (header first when
        requested) when `raw` is set.
    """
    rows = [display_record(r, columns, raw) for r in records]
    if raw:
        return ([display_header(columns)] if include_header else []) + rows
    return tabulate(
        rows,
        headers=display_header(columns) if include_header else (),
        tablefmt="rounded_grid",
        colalign=[c.align for c in columns],
        disable_numparse=True,
    )


class Alert:
    """Boxed messages printed between prompts."""

    @staticmethod
    def _box(message: str, title: str) -> str:
        lines = []
        for paragraph in message.splitlines() or [""]:
            lines.extend(textwrap.wrap(paragraph, ALERT_WIDTH - 4) or [""])
        return tabulate([[line] for line in lines], headers=[title], tablefmt="rounded_outline")

    @classmethod
    def _show(cls, message: str, title: str) -> None:
        print()
        print(cls._box(message, title))
        print()

    @classmethod
    def error(cls, message: str, title: Optional[str] = None) -> None:
        cls._show(message, f"x {title or 'Error'}")

    @classmethod
    def success(cls, message: str, title: Optional[str] = None) -> None:
        cls._show(message, f"✔ {title or 'Success'}")

    @classmethod
    def warn(cls, message: str, title: Optional[str] = None) -> None:
        cls._show(message, f"! {title or 'Warning'}")

    @classmethod
    def info(cls, message: str, title: Optional[str] = None) -> None:
        cls._show(message, f"i {title or 'Info'}")
