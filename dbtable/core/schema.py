"""Schema: the set of Table handles an application works with.

Applications build one Schema at startup, register a Table per record
type, and pass the Schema (or individual tables) to the code that needs
them. There is no module-level registry of tables.
"""

from __future__ import annotations

import logging
from typing import Iterator

from sqlalchemy.engine import Connection

from dbtable.core.registry import SchemaRegistry
from dbtable.core.table import Table
from dbtable.exceptions import SchemaError

log = logging.getLogger("dbtable.schema")


class Schema:
    """Ordered collection of Table handles.

    Examples:
        >>> schema = Schema([accounts, statuses])
        >>> with engine.begin() as conn:
        ...     schema.create_all(conn)
        >>> schema["accounts"].query(conn, "WHERE acct = ?", ["a1"])
    """

    def __init__(self, tables: list[Table] | None = None):
        """Initialize schema.

        Args:
            tables: Tables to register, in creation order

        Raises:
            SchemaError: If two tables share a name
        """
        self._tables: dict[str, Table] = {}
        for table in tables or []:
            self.add(table)

    def add(self, table: Table) -> Table:
        """Register a table and return it.

        Raises:
            SchemaError: If a table with the same name is already registered
        """
        if table.name in self._tables:
            raise SchemaError(f"Table already registered: {table.name}")
        self._tables[table.name] = table
        return table

    def get(self, name: str) -> Table:
        """Return the table registered under ``name``.

        Raises:
            SchemaError: If no such table is registered
        """
        try:
            return self._tables[name]
        except KeyError:
            raise SchemaError(f"Unknown table: {name}") from None

    def create_all(self, connection: Connection, force: bool = False) -> None:
        """Create every registered table that does not exist yet.

        One catalog snapshot is taken up front and shared by all tables.

        Args:
            connection: Open SQLAlchemy connection
            force: Drop and recreate every table

        Raises:
            StorageError: If reading the catalog or a DDL statement fails
        """
        existing = SchemaRegistry.snapshot(connection)
        log.debug("creating %d tables (force=%s)", len(self._tables), force)
        for table in self._tables.values():
            table.create(connection, existing, force)

    @property
    def names(self) -> list[str]:
        return list(self._tables)

    def __getitem__(self, name: str) -> Table:
        return self.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._tables

    def __iter__(self) -> Iterator[Table]:
        return iter(self._tables.values())

    def __len__(self) -> int:
        return len(self._tables)
