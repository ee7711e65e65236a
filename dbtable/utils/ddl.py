"""Column name extraction from DDL fragments.

Definitions are trusted text and are never validated. This module only
reads the leading identifier of each top-level entry so insert column
lists can be checked against what the table declares.
"""

from __future__ import annotations

# Entries starting with these keywords are table constraints, not columns
_CONSTRAINT_KEYWORDS = {"constraint", "primary", "unique", "check", "foreign"}

_QUOTES = {'"': '"', "`": "`", "[": "]", "'": "'"}


def split_definition(definition: str) -> list[str]:
    """Split a DDL fragment on top-level commas.

    Commas inside parentheses, quoted identifiers, string literals and
    SQL comments do not split.

    Args:
        definition: Column-definition fragment

    Returns:
        List of stripped, non-empty entries

    Examples:
        >>> split_definition("a TEXT, b NUMERIC(10, 2), PRIMARY KEY (a, b)")
        ['a TEXT', 'b NUMERIC(10, 2)', 'PRIMARY KEY (a, b)']
    """
    entries = []
    current = []
    depth = 0
    i = 0
    n = len(definition)

    while i < n:
        ch = definition[i]

        if ch in _QUOTES:
            closing = _QUOTES[ch]
            end = definition.find(closing, i + 1)
            # '' and "" escape a quote inside the literal
            while end != -1 and closing in "'\"" and definition[end + 1 : end + 2] == closing:
                end = definition.find(closing, end + 2)
            end = n - 1 if end == -1 else end
            current.append(definition[i : end + 1])
            i = end + 1
            continue

        if definition.startswith("--", i):
            end = definition.find("\n", i)
            i = n if end == -1 else end
            continue

        if definition.startswith("/*", i):
            end = definition.find("*/", i + 2)
            i = n if end == -1 else end + 2
            continue

        if ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
        elif ch == "," and depth == 0:
            entries.append("".join(current).strip())
            current = []
            i += 1
            continue

        current.append(ch)
        i += 1

    entries.append("".join(current).strip())
    return [e for e in entries if e]


def unquote_identifier(identifier: str) -> str:
    """Strip one level of SQL identifier quoting, if present.

    Examples:
        >>> unquote_identifier('"order"')
        'order'
        >>> unquote_identifier("acct")
        'acct'
    """
    if identifier[:1] in _QUOTES and identifier[-1:] == _QUOTES[identifier[0]]:
        return identifier[1:-1]
    return identifier


def _leading_identifier(entry: str) -> str:
    opening = entry[0]
    if opening in _QUOTES:
        end = entry.find(_QUOTES[opening], 1)
        return entry if end == -1 else entry[: end + 1]
    return entry.split(None, 1)[0].split("(", 1)[0]


def declared_columns(definition: str) -> list[str]:
    """Return the column names declared in a DDL fragment, in order.

    Args:
        definition: Column-definition fragment

    Returns:
        Column names with identifier quoting removed

    Examples:
        >>> declared_columns("acct TEXT PRIMARY KEY, name TEXT NOT NULL")
        ['acct', 'name']
        >>> declared_columns('"order" INTEGER, CONSTRAINT pk PRIMARY KEY ("order")')
        ['order']
    """
    columns = []
    for entry in split_definition(definition):
        identifier = _leading_identifier(entry)
        if identifier.lower() in _CONSTRAINT_KEYWORDS:
            continue
        columns.append(unquote_identifier(identifier))
    return columns
