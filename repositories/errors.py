"""
repositories/errors.py
----------------------
Storage-level exceptions.

Repositories raise these instead of leaking sqlite3 errors, so the service
layer can catch them uniformly and decide whether to propagate.
"""


class RegistryError(Exception):
    """Base class for all registry storage errors."""


class PersistenceError(RegistryError):
    """A query, constraint or connection failure in the storage layer."""


class RecordNotFoundError(RegistryError):
    """The record addressed by id does not exist."""


class InvalidRecordError(RegistryError):
    """The data given for a record is incomplete or names unknown fields."""
