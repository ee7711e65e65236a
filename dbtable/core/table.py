"""Table handle: DDL, insert and query for one SQLite table.

A Table couples a table name with the raw column-definition fragment used
to create it. It generates SQL text, binds parameters and hydrates rows; the
connection is always supplied by the caller and borrowed for one call.

Definition and WHERE fragments are concatenated into statements verbatim.
They are never sanitized and must not carry untrusted input. Values always
travel as bound parameters.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Any, Optional, Union

from pydantic import BaseModel, Field as PydanticField, field_validator
from sqlalchemy.engine import Connection
from sqlalchemy.exc import SQLAlchemyError

from dbtable.core import codec
from dbtable.core.config import config
from dbtable.exceptions import SchemaError, SerializationError, StorageError
from dbtable.models.conflict import Conflict, ConflictResolution, Upsert
from dbtable.utils.ddl import declared_columns, unquote_identifier

log = logging.getLogger("dbtable.table")

Params = Union[Sequence[Any], Mapping[str, Any]]

# Raised by the driver while binding, outside the DBAPI error tree
_BIND_ERRORS = (OverflowError, UnicodeEncodeError)


class Table(BaseModel):
    """Handle for a single SQLite table.

    Build one per record type at startup and pass it to the code that
    needs it, usually through a :class:`~dbtable.core.schema.Schema`.

    Examples:
        >>> accounts = Table(
        ...     name="accounts",
        ...     definition="acct TEXT PRIMARY KEY, name TEXT NOT NULL",
        ...     record_type=Account,
        ... )
        >>> accounts.create(conn, tables(conn))
        >>> accounts.insert(conn, account, ["acct", "name"], ConflictResolution.IGNORE)
        1
        >>> accounts.query(conn, "WHERE acct = ?", ["a1"])
        [Account(acct='a1', name='Alice')]
    """

    name: str = PydanticField(
        ...,
        description="Table name, unique per database",
    )

    definition: str = PydanticField(
        ...,
        description="Column-definition fragment placed inside CREATE TABLE (...)",
    )

    record_type: Optional[type] = PydanticField(
        None,
        description="Default record type used to hydrate query results",
    )

    model_config = {"extra": "forbid", "frozen": True}

    @field_validator("name", "definition")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        """Reject blank names and definitions."""
        if not v.strip():
            raise ValueError("must not be blank")
        return v.strip()

    @property
    def columns(self) -> list[str]:
        """Column names declared in the definition, in declaration order."""
        return declared_columns(self.definition)

    def create(self, connection: Connection, tables: Iterable[str], force: bool = False) -> None:
        """Create the table unless it already exists.

        Args:
            connection: Open SQLAlchemy connection
            tables: Snapshot of existing table names (see SchemaRegistry)
            force: Drop and recreate the table, destroying its rows

        Raises:
            StorageError: If the engine rejects a statement
        """
        exists = self.name in tables
        if exists and not force:
            log.debug("table %s exists, skipping create", self.name)
            return

        if force:
            log.info("dropping table %s", self.name)
            self._execute_ddl(connection, f"DROP TABLE IF EXISTS {self.name}")

        log.info("creating table %s", self.name)
        self._execute_ddl(connection, f"CREATE TABLE {self.name} ({self.definition})")

    def insert(
        self,
        connection: Connection,
        record: Any,
        columns: Sequence[str],
        conflict: Conflict = ConflictResolution.NONE,
    ) -> int:
        """Insert one record.

        Each column is bound to the record field of the same name. Columns
        may be given bare or quoted (``"order"``) and are always quoted in
        the statement. Columns left out of ``columns`` take their declared
        default or NULL.

        Args:
            connection: Open SQLAlchemy connection
            record: Record to insert
            columns: Columns to write, in statement order
            conflict: Conflict policy, or an Upsert clause

        Returns:
            Number of rows affected (0 when IGNORE skipped a conflicting row)

        Raises:
            SchemaError: If the column list is inconsistent with the table
            SerializationError: If the record cannot be converted to scalars
            StorageError: If the engine rejects the statement
        """
        columns = [unquote_identifier(c) for c in columns]
        if config.check_columns:
            self._check_columns(columns)

        values = codec.serialize(record, columns)
        if config.check_columns:
            missing = [c for c in columns if c not in values]
            if missing:
                raise SerializationError(
                    f"{type(record).__name__} has no value for column(s): {', '.join(missing)}"
                )

        sql = self._build_insert_sql(connection, columns, conflict)
        if config.log_statements:
            log.debug("%s", sql)

        try:
            result = connection.exec_driver_sql(sql, tuple(values[c] for c in columns if c in values))
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to insert into {self.name}: {e}", orig=e) from e
        except _BIND_ERRORS as e:
            raise StorageError(f"Failed to bind values for {self.name}: {e}", orig=e) from e
        return result.rowcount

    def query(
        self,
        connection: Connection,
        where: str = "",
        params: Params = (),
        record_type: Optional[type] = None,
    ) -> list[Any]:
        """Select rows and hydrate them into records.

        Args:
            connection: Open SQLAlchemy connection
            where: Trailing SQL fragment, e.g. ``"WHERE acct = ?"``
            params: Positional values for ``?`` or a mapping for ``:name``
            record_type: Record type overriding the table's default.
                Rows are returned as dicts when neither is set.

        Returns:
            Records in the engine's row order

        Raises:
            DeserializationError: If a row does not fit the record type
            StorageError: If the engine rejects the statement
        """
        sql = f"SELECT * FROM {self.name} {where}".rstrip()
        if config.log_statements:
            log.debug("%s", sql)

        bound = dict(params) if isinstance(params, Mapping) else tuple(params)
        try:
            rows = [dict(row) for row in connection.exec_driver_sql(sql, bound).mappings()]
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to query {self.name}: {e}", orig=e) from e
        except _BIND_ERRORS as e:
            raise StorageError(f"Failed to bind parameters for {self.name}: {e}", orig=e) from e

        target = record_type or self.record_type
        if target is None:
            return rows
        return [codec.deserialize(row, target) for row in rows]

    def _build_insert_sql(self, connection: Connection, columns: list[str], conflict: Conflict) -> str:
        quote = connection.dialect.identifier_preparer.quote
        fields = ", ".join(quote(c) for c in columns)
        placeholders = ", ".join("?" for _ in columns)

        if isinstance(conflict, Upsert):
            return f"INSERT INTO {self.name} ({fields}) VALUES ({placeholders}) {conflict.clause}"

        conflict = ConflictResolution(conflict)
        verb = "INSERT"
        if conflict.clause:
            verb = f"INSERT OR {conflict.clause}"
        return f"{verb} INTO {self.name} ({fields}) VALUES ({placeholders})"

    def _check_columns(self, columns: list[str]) -> None:
        if not columns:
            raise SchemaError(f"Insert into {self.name} needs at least one column")

        lowered = [c.lower() for c in columns]
        duplicates = sorted({c for c in lowered if lowered.count(c) > 1})
        if duplicates:
            raise SchemaError(f"Duplicate column(s) for {self.name}: {', '.join(duplicates)}")

        declared = {c.lower() for c in self.columns}
        # Unparseable definitions leave the check to the engine
        if not declared:
            return
        undeclared = [c for c in columns if c.lower() not in declared]
        if undeclared:
            raise SchemaError(
                f"Column(s) not declared in {self.name}: {', '.join(undeclared)}"
            )

    def _execute_ddl(self, connection: Connection, sql: str) -> None:
        if config.log_statements:
            log.debug("%s", sql)
        try:
            connection.exec_driver_sql(sql)
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to execute DDL on {self.name}: {e}", orig=e) from e
