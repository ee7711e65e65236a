"""dbtable exception hierarchy."""

from __future__ import annotations

from typing import Optional


class DBTableError(Exception):
    """Base exception for all dbtable errors."""

    pass


class ConfigurationError(DBTableError):
    """Raised when configuration is invalid."""

    pass


class StorageError(DBTableError):
    """Raised when the storage engine rejects or fails a statement.

    The engine's own exception is chained as ``__cause__`` and kept on
    ``orig`` so callers can inspect the native error.
    """

    def __init__(self, message: str, orig: Optional[BaseException] = None):
        super().__init__(message)
        self.orig = orig


class SerializationError(DBTableError):
    """Raised when a record cannot be converted into bindable scalars."""

    pass


class DeserializationError(DBTableError):
    """Raised when a result row cannot be converted back into a record."""

    pass


class SchemaError(DBTableError):
    """Raised when a column list or table registration is inconsistent."""

    pass
