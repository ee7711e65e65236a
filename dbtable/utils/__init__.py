"""dbtable utilities package.

This package contains DDL helpers and logging setup.
"""

from dbtable.utils.ddl import declared_columns, split_definition, unquote_identifier
from dbtable.utils.logging import configure_logging

__all__ = [
    "configure_logging",
    "declared_columns",
    "split_definition",
    "unquote_identifier",
]
