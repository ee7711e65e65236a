"""Tests for the Schema application context."""

import pytest

from dbtable.core.registry import tables
from dbtable.core.schema import Schema
from dbtable.core.table import Table
from dbtable.exceptions import SchemaError

from conftest import ACCOUNT_COLUMNS


@pytest.fixture
def statuses_table():
    return Table(
        name="statuses",
        definition="id TEXT PRIMARY KEY, acct TEXT NOT NULL REFERENCES accounts(acct), body TEXT NOT NULL",
    )


class TestSchema:
    """Test table registration and bulk creation."""

    def test_registration(self, accounts_table, statuses_table):
        """Test tables are reachable by name and kept in order."""
        schema = Schema([accounts_table, statuses_table])

        assert schema.names == ["accounts", "statuses"]
        assert schema["accounts"] is accounts_table
        assert schema.get("statuses") is statuses_table
        assert "accounts" in schema
        assert len(schema) == 2
        assert list(schema) == [accounts_table, statuses_table]

    def test_duplicate_name(self, accounts_table):
        """Test a name can only be registered once."""
        schema = Schema([accounts_table])
        with pytest.raises(SchemaError, match="accounts"):
            schema.add(Table(name="accounts", definition="id INTEGER"))

    def test_unknown_name(self):
        """Test lookups of unregistered tables fail."""
        with pytest.raises(SchemaError, match="missing"):
            Schema()["missing"]

    def test_create_all(self, conn, accounts_table, statuses_table):
        """Test every table is created."""
        Schema([accounts_table, statuses_table]).create_all(conn)
        assert tables(conn) == {"accounts", "statuses"}

    def test_create_all_idempotent(self, conn, accounts_table, statuses_table, alice):
        """Test repeated setup keeps existing rows."""
        schema = Schema([accounts_table, statuses_table])
        schema.create_all(conn)
        accounts_table.insert(conn, alice, ACCOUNT_COLUMNS)

        schema.create_all(conn)

        assert len(accounts_table.query(conn)) == 1

    def test_create_all_force(self, conn, accounts_table, statuses_table, alice):
        """Test force recreates every table empty."""
        schema = Schema([accounts_table, statuses_table])
        schema.create_all(conn)
        accounts_table.insert(conn, alice, ACCOUNT_COLUMNS)

        schema.create_all(conn, force=True)

        assert accounts_table.query(conn) == []
