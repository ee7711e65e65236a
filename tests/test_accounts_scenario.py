"""End-to-end account caching scenario across connections."""

from dbtable.core.registry import tables
from dbtable.models.conflict import ConflictResolution

from conftest import ACCOUNT_COLUMNS


class TestAccountsScenario:
    """Insert-or-skip and insert-or-update against one accounts table."""

    def test_ignore_then_replace(self, engine, accounts_table, alice):
        """Test the full ignore/replace cycle with committed transactions."""
        with engine.begin() as conn:
            accounts_table.create(conn, tables(conn))
            assert accounts_table.insert(conn, alice, ACCOUNT_COLUMNS, ConflictResolution.IGNORE) == 1

        renamed = alice.model_copy(update={"name": "Alice Updated"})

        with engine.begin() as conn:
            assert accounts_table.insert(conn, renamed, ACCOUNT_COLUMNS, ConflictResolution.IGNORE) == 0

        with engine.connect() as conn:
            [stored] = accounts_table.query(conn, "WHERE acct = ?", ["a1"])
            assert stored.name == "Alice"
            assert stored.fetched == alice.fetched

        with engine.begin() as conn:
            assert accounts_table.insert(conn, renamed, ACCOUNT_COLUMNS, ConflictResolution.REPLACE) == 1

        with engine.connect() as conn:
            assert accounts_table.query(conn, "WHERE acct = ?", ["a1"]) == [renamed]

    def test_setup_is_repeatable(self, engine, accounts_table, alice):
        """Test running setup again on an existing database keeps data."""
        for _ in range(2):
            with engine.begin() as conn:
                accounts_table.create(conn, tables(conn))
                accounts_table.insert(conn, alice, ACCOUNT_COLUMNS, ConflictResolution.IGNORE)

        with engine.connect() as conn:
            assert len(accounts_table.query(conn)) == 1
