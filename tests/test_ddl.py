"""Tests for DDL column extraction."""

from dbtable.utils.ddl import declared_columns, split_definition


class TestSplitDefinition:
    """Test top-level splitting."""

    def test_nested_commas(self):
        """Test commas inside parentheses do not split."""
        assert split_definition("price NUMERIC(10, 2), qty INTEGER") == [
            "price NUMERIC(10, 2)",
            "qty INTEGER",
        ]

    def test_quoted_commas(self):
        """Test commas inside string literals do not split."""
        assert split_definition("note TEXT DEFAULT 'a, b', n INTEGER") == [
            "note TEXT DEFAULT 'a, b'",
            "n INTEGER",
        ]

    def test_escaped_quote(self):
        """Test doubled quotes stay inside the literal."""
        assert split_definition("note TEXT DEFAULT 'it''s, ok', n INTEGER") == [
            "note TEXT DEFAULT 'it''s, ok'",
            "n INTEGER",
        ]

    def test_comments_dropped(self):
        """Test SQL comments are removed."""
        definition = """
            id INTEGER, -- primary, surrogate
            /* display, name */ name TEXT
        """
        assert split_definition(definition) == ["id INTEGER", "name TEXT"]

    def test_trailing_comma(self):
        """Test empty entries are dropped."""
        assert split_definition("id INTEGER,") == ["id INTEGER"]


class TestDeclaredColumns:
    """Test column name extraction."""

    def test_skips_table_constraints(self):
        """Test table constraints are not reported as columns."""
        definition = """
            a TEXT NOT NULL,
            b INTEGER CHECK (b > 0),
            PRIMARY KEY (a, b),
            UNIQUE (b),
            CHECK (length(a) > 0),
            FOREIGN KEY (a) REFERENCES other(a),
            CONSTRAINT named UNIQUE (a)
        """
        assert declared_columns(definition) == ["a", "b"]

    def test_quoted_identifiers(self):
        """Test quoting styles are removed."""
        definition = '"order" INTEGER, `group` TEXT, [select] TEXT'
        assert declared_columns(definition) == ["order", "group", "select"]

    def test_untyped_column(self):
        """Test columns without a type are still found."""
        assert declared_columns("id, name") == ["id", "name"]

    def test_empty(self):
        """Test an unparseable fragment yields no columns."""
        assert declared_columns("") == []
