"""dbtable - typed records on SQLite tables."""

__version__ = "0.1.0"

# Re-export models
from dbtable.models import ConflictResolution, SQLType, SQLValue, Upsert

# Re-export core classes
from dbtable.core import Schema, SchemaRegistry, Table, tables

# Re-export exceptions
from dbtable.exceptions import (
    ConfigurationError,
    DBTableError,
    DeserializationError,
    SchemaError,
    SerializationError,
    StorageError,
)

__all__ = [
    # Version
    "__version__",
    # Models
    "ConflictResolution",
    "Upsert",
    "SQLType",
    "SQLValue",
    # Core
    "Table",
    "Schema",
    "SchemaRegistry",
    "tables",
    # Exceptions
    "DBTableError",
    "ConfigurationError",
    "StorageError",
    "SerializationError",
    "DeserializationError",
    "SchemaError",
]
