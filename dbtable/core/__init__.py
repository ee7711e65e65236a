"""dbtable core package.

This package contains the table handle, the catalog registry, the record
codec and configuration.
"""

from dbtable.core.registry import SchemaRegistry, tables
from dbtable.core.schema import Schema
from dbtable.core.table import Table

__all__ = [
    "SchemaRegistry",
    "Schema",
    "Table",
    "tables",
]
