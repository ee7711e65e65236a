"""Schema registry.

Answers "does this table already exist?" for a connection by reading the
database catalog once and handing back the set of table names.
"""

from __future__ import annotations

import logging

from sqlalchemy import inspect
from sqlalchemy.engine import Connection
from sqlalchemy.exc import SQLAlchemyError

from dbtable.exceptions import StorageError

log = logging.getLogger("dbtable.registry")


class SchemaRegistry:
    """Catalog reader for SQLite databases.

    The registry keeps no state. Each snapshot is read fresh from the
    catalog and goes stale as soon as tables are created or dropped
    elsewhere; callers that want reuse keep the returned set.

    Examples:
        >>> with engine.connect() as conn:
        ...     tables = SchemaRegistry.snapshot(conn)
        ...     "accounts" in tables
        True
    """

    @staticmethod
    def snapshot(connection: Connection) -> set[str]:
        """Return the names of all tables present in the database.

        Regular and temporary tables are included. Tables in attached
        databases are listed as ``<schema>.<table>``. SQLite's internal
        ``sqlite_*`` tables are not included.

        Args:
            connection: Open SQLAlchemy connection

        Returns:
            Set of table names

        Raises:
            StorageError: If the catalog cannot be read
        """
        try:
            inspector = inspect(connection)
            names = set(inspector.get_table_names())
            names.update(inspector.get_temp_table_names())
            for schema in inspector.get_schema_names():
                if schema == inspector.default_schema_name:
                    continue
                names.update(f"{schema}.{name}" for name in inspector.get_table_names(schema=schema))
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to read table catalog: {e}", orig=e) from e

        log.debug("catalog snapshot: %d tables", len(names))
        return names


def tables(connection: Connection) -> set[str]:
    """Shortcut for :meth:`SchemaRegistry.snapshot`."""
    return SchemaRegistry.snapshot(connection)
