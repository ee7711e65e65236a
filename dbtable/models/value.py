"""Scalar value model for bound parameters.

Every value bound into a statement is first normalized into one of
SQLite's five storage classes. This keeps the table layer independent of
whatever types a record model happens to use.
"""

from __future__ import annotations

from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from typing import Any, Union
from uuid import UUID

from pydantic import BaseModel, Field as PydanticField

from dbtable.exceptions import SerializationError

Scalar = Union[None, int, float, str, bytes]

# SQLite INTEGER is a signed 64-bit value
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


class SQLType(str, Enum):
    """SQLite storage classes."""

    NULL = "null"
    INTEGER = "integer"
    REAL = "real"
    TEXT = "text"
    BLOB = "blob"


class SQLValue(BaseModel):
    """A scalar tagged with its storage class.

    Examples:
        >>> to_sql_value(True)
        SQLValue(type=<SQLType.INTEGER: 'integer'>, value=1)
        >>> to_sql_value(datetime(2024, 1, 1)).value
        '2024-01-01T00:00:00'
    """

    type: SQLType = PydanticField(
        ...,
        description="Storage class of the value",
    )

    value: Scalar = PydanticField(
        None,
        description="Python scalar handed to the driver",
    )

    model_config = {"extra": "forbid", "frozen": True}


def to_sql_value(value: Any) -> SQLValue:
    """Normalize a Python value into a tagged scalar.

    Args:
        value: A value produced by dumping a record

    Returns:
        SQLValue ready for binding

    Raises:
        SerializationError: If the value has no scalar mapping
    """
    if value is None:
        return SQLValue(type=SQLType.NULL, value=None)

    # bool before int, bool is an int subclass
    if isinstance(value, bool):
        return SQLValue(type=SQLType.INTEGER, value=int(value))
    if isinstance(value, Enum):
        return to_sql_value(value.value)
    if isinstance(value, int):
        if not INT64_MIN <= value <= INT64_MAX:
            raise SerializationError(f"Integer {value} does not fit in 64 bits")
        return SQLValue(type=SQLType.INTEGER, value=value)
    if isinstance(value, float):
        return SQLValue(type=SQLType.REAL, value=value)
    if isinstance(value, str):
        try:
            value.encode("utf-8")
        except UnicodeEncodeError as e:
            raise SerializationError(f"Text is not valid UTF-8: {e}") from e
        return SQLValue(type=SQLType.TEXT, value=value)
    if isinstance(value, (bytes, bytearray, memoryview)):
        return SQLValue(type=SQLType.BLOB, value=bytes(value))

    # datetime before date, datetime is a date subclass
    if isinstance(value, (datetime, date, time)):
        return SQLValue(type=SQLType.TEXT, value=value.isoformat())
    if isinstance(value, (Decimal, UUID)):
        return SQLValue(type=SQLType.TEXT, value=str(value))

    raise SerializationError(
        f"No scalar mapping for value of type {type(value).__name__}"
    )
