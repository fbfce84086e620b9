"""
services/base_service.py
------------------------
The create / find / update / delete contract shared by every entity service.

Error policy:
    Storage errors (repositories.errors.RegistryError) are logged and turned
    into a sentinel: None for create/find/delete, False for update. Passing
    `throw_on_error=True` re-raises them instead.
"""

from dataclasses import asdict, dataclass, fields, is_dataclass, MISSING
from typing import Any, Mapping, Optional, Sequence, Union

from db.connection import Database
from repositories.base_repo import BaseRepository, Join
from repositories.errors import InvalidRecordError, RegistryError
from utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class Page:
    """A page of results plus the total count of matching records."""
    items: list
    count: int


def to_plain(value: Any) -> Any:
    """Detach models into plain dicts (recursively, lists included)."""
    if isinstance(value, list):
        return [to_plain(v) for v in value]
    if isinstance(value, Page):
        return Page(items=to_plain(value.items), count=value.count)
    if is_dataclass(value) and not isinstance(value, type):
        return asdict(value)
    return value


class EntityService:
    """
    Generic CRUD façade over one repository.

    Subclasses set MODEL and REPOSITORY, and override `_joins` when the
    entity can eagerly load related records.
    """

    MODEL: type = object
    REPOSITORY: type = BaseRepository

    def __init__(self, db: Database):
        self.db = db
        self.repo = self.REPOSITORY(db)

    @property
    def entity_name(self) -> str:
        return self.MODEL.__name__.lower()

    # ── Hooks ─────────────────────────────────────────────

    def _joins(self, **include: bool) -> list[Join]:
        """Map include_* flags to repository joins."""
        requested = [name for name, flag in include.items() if flag]
        if requested:
            raise TypeError(f"{type(self).__name__} cannot load {', '.join(requested)}")
        return []

    def _prepare(self, model):
        """Adjust a model right before it is inserted."""
        return model

    # ── Helpers ───────────────────────────────────────────

    def _build(self, data: Union[Mapping[str, Any], Any]):
        """
        Turn a mapping into a model, ignoring keys that are not model fields.

        Raises:
            InvalidRecordError: If a required field is missing.
        """
        if isinstance(data, self.MODEL):
            return data
        names = {f.name for f in fields(self.MODEL)}
        values = {k: v for k, v in dict(data).items() if k in names}
        values.pop("id", None)
        missing = [
            f.name for f in fields(self.MODEL)
            if f.default is MISSING and f.default_factory is MISSING and f.name not in values
        ]
        if missing:
            raise InvalidRecordError(f"Missing {self.entity_name} field(s): {', '.join(missing)}")
        return self.MODEL(**values)

    def _fail(self, action: str, error: Exception, throw_on_error: bool) -> None:
        logger.error(f"Failed to {action} {self.entity_name}: {error}")
        if throw_on_error:
            raise error

    # ── CRUD ──────────────────────────────────────────────

    def create(
        self,
        data,
        *,
        include_species: bool = False,
        return_plain: bool = False,
        throw_on_error: bool = False,
    ):
        """
        Create one record, or a batch when `data` is a list.

        Args:
            data: Mapping or model (or a list of them).
            include_species: Reload the created record(s) with the species attached.
            return_plain: Return plain dicts instead of models.
            throw_on_error: Raise storage errors instead of returning None.

        Returns:
            The created model(s) with ids assigned, or None on failure.
        """
        is_bulk = isinstance(data, list)
        try:
            joins = self._joins(include_species=include_species)
            models = [self._prepare(self._build(d)) for d in (data if is_bulk else [data])]
            created = self.repo.add_many(models)
            if joins:
                created = [self.repo.get_by_id(m.id, joins=joins) for m in created]
        except RegistryError as e:
            self._fail("create", e, throw_on_error)
            return None

        result = created if is_bulk else created[0]
        return to_plain(result) if return_plain else result

    def find(
        self,
        criteria: Optional[Mapping[str, Any]] = None,
        *,
        page: int = 0,
        limit: Optional[int] = None,
        include_count: bool = False,
        order_by: Optional[str] = None,
        return_plain: bool = False,
        throw_on_error: bool = False,
        **include: bool,
    ):
        """
        Find records matching the criteria (see repositories.filters).

        Args:
            criteria: field -> value mapping; None matches everything.
            page: Zero-based page index, used together with `limit`.
            limit: Page size; None returns every match.
            include_count: Also count every match, regardless of paging.
            order_by: Single field to sort by; defaults to id.
            return_plain: Return plain dicts instead of models.
            throw_on_error: Raise storage errors instead of returning None.
            **include: include_* flags naming related records to load.

        Returns:
            A list of records, a Page when `include_count` is set,
            or None on failure.
        """
        joins = self._joins(**include)
        try:
            records = self.repo.find(criteria, page=page, limit=limit, order_by=order_by, joins=joins)
            result = Page(records, self.repo.count(criteria)) if include_count else records
        except RegistryError as e:
            self._fail("find", e, throw_on_error)
            return None
        return to_plain(result) if return_plain else result

    def update(self, data: Mapping[str, Any], *, throw_on_error: bool = False) -> bool:
        """
        Update the record identified by data["id"], changing only the
        other fields present in `data`.

        Returns:
            True when the record was updated, False otherwise.
        """
        values = dict(data)
        record_id = values.pop("id", None)
        try:
            if record_id is None:
                raise InvalidRecordError(f"Cannot update a {self.entity_name} without an id")
            unknown = [k for k in values if k not in self.repo.COLUMNS]
            if unknown:
                raise InvalidRecordError(f"Unknown {self.entity_name} field(s): {', '.join(unknown)}")
            self.repo.update(record_id, values)
        except RegistryError as e:
            self._fail("update", e, throw_on_error)
            return False
        return True

    def delete(self, record_ids: Union[int, Sequence[int]], *, throw_on_error: bool = False) -> Optional[int]:
        """
        Delete one or more records by id.

        Returns:
            Number of deleted records, or None on failure.
        """
        ids = list(record_ids) if isinstance(record_ids, (list, tuple, set)) else [record_ids]
        try:
            return self.repo.delete(ids)
        except RegistryError as e:
            self._fail("delete", e, throw_on_error)
            return None
