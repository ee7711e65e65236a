"""Accounts example.

Defines an Account record and its table, creates the schema in a SQLite
file, then inserts and reads back an account.

Run with:
    python examples/accounts_example.py /tmp/accounts.db
"""

from __future__ import annotations

import sys
from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel
from sqlalchemy import create_engine
from sqlalchemy.engine import Connection

from dbtable import ConflictResolution, Schema, Table
from dbtable.utils import configure_logging

ACCOUNT_COLUMNS = ["acct", "id", "name", "display_name", "note", "url", "fetched"]


class Account(BaseModel):
    acct: str
    id: Optional[str] = None
    name: str
    display_name: str
    note: str
    url: str
    fetched: datetime

    def insert(self, conn: Connection, table: Table) -> int:
        # Accounts with a server id are authoritative and overwrite the cached row
        conflict = ConflictResolution.REPLACE if self.id is not None else ConflictResolution.IGNORE
        return table.insert(conn, self, ACCOUNT_COLUMNS, conflict)


def build_schema() -> Schema:
    """Build the application schema."""
    return Schema(
        [
            Table(
                name="accounts",
                definition="""
                    acct TEXT PRIMARY KEY,
                    id TEXT,
                    name TEXT NOT NULL,
                    display_name TEXT NOT NULL,
                    note TEXT NOT NULL,
                    url TEXT NOT NULL,
                    fetched TEXT NOT NULL
                """,
                record_type=Account,
            )
        ]
    )


def main(database: str) -> None:
    configure_logging()
    schema = build_schema()
    accounts = schema["accounts"]
    engine = create_engine(f"sqlite:///{database}")

    with engine.begin() as conn:
        schema.create_all(conn)

        alice = Account(
            acct="alice@example.org",
            name="alice",
            display_name="Alice",
            note="",
            url="https://example.org/@alice",
            fetched=datetime.now(timezone.utc),
        )
        print(f"inserted: {alice.insert(conn, accounts)}")

        synced = alice.model_copy(update={"id": "101", "note": "synced"})
        print(f"replaced: {synced.insert(conn, accounts)}")

        for account in accounts.query(conn, "WHERE acct = ?", [alice.acct]):
            print(account)

    engine.dispose()


if __name__ == "__main__":
    main(sys.argv[1] if len(sys.argv) > 1 else "accounts.db")
