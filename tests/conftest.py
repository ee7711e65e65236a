"""Shared fixtures for dbtable tests."""

from __future__ import annotations

import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

import pytest
from pydantic import BaseModel
from sqlalchemy import create_engine

from dbtable.core.config import config
from dbtable.core.table import Table


class Account(BaseModel):
    acct: str
    id: Optional[str] = None
    name: str
    display_name: str
    note: str
    url: str
    fetched: datetime


ACCOUNT_COLUMNS = ["acct", "id", "name", "display_name", "note", "url", "fetched"]

ACCOUNT_DEFINITION = """
    acct TEXT PRIMARY KEY,
    id TEXT,
    name TEXT NOT NULL,
    display_name TEXT NOT NULL,
    note TEXT NOT NULL DEFAULT '',
    url TEXT NOT NULL,
    fetched TEXT NOT NULL
"""


@pytest.fixture
def temp_db():
    """Create a temporary SQLite database."""
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = f.name
    yield db_path
    # Cleanup
    Path(db_path).unlink(missing_ok=True)


@pytest.fixture
def engine(temp_db):
    """Create a SQLAlchemy engine on the temporary database."""
    engine = create_engine(f"sqlite:///{temp_db}")
    yield engine
    engine.dispose()


@pytest.fixture
def conn(engine):
    """Open a connection; the test owns it for its whole duration."""
    with engine.connect() as connection:
        yield connection


@pytest.fixture
def accounts_table():
    """Table handle for Account records."""
    return Table(name="accounts", definition=ACCOUNT_DEFINITION, record_type=Account)


@pytest.fixture
def alice():
    """A sample account."""
    return Account(
        acct="a1",
        id=None,
        name="Alice",
        display_name="Alice A",
        note="",
        url="http://x",
        fetched=datetime(2024, 3, 1, 12, 30, 15, 250000, tzinfo=timezone.utc),
    )


@pytest.fixture
def restore_config():
    """Restore global config values after a test changes them."""
    saved = config.as_dict()
    yield config
    for key, value in saved.items():
        setattr(config, key, value)
