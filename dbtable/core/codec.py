"""Record codec.

Converts records to and from the scalar mappings the table layer binds and
reads. Records may be pydantic models, dataclasses, TypedDicts or plain
mappings; all of them go through a pydantic TypeAdapter so a single code
path handles every record shape.
"""

from __future__ import annotations

from collections.abc import Mapping
from functools import lru_cache
from typing import Any, Optional, TypeVar

from pydantic import PydanticSchemaGenerationError, TypeAdapter, ValidationError

from dbtable.exceptions import DeserializationError, SerializationError
from dbtable.models.value import Scalar, to_sql_value

T = TypeVar("T")


@lru_cache(maxsize=None)
def _adapter(record_type: Any) -> TypeAdapter:
    return TypeAdapter(record_type)


def serialize(record: Any, columns: Optional[list[str]] = None) -> dict[str, Scalar]:
    """Serialize a record into a column name -> scalar mapping.

    Args:
        record: Record instance (model, dataclass, TypedDict or mapping)
        columns: Optional subset of field names to keep. Fields not listed
            are dropped before scalar conversion, so they need no mapping.

    Returns:
        Mapping of field names to bindable scalars

    Raises:
        SerializationError: If the record cannot be dumped or a kept field
            has no scalar mapping
    """
    if isinstance(record, Mapping):
        dumped = dict(record)
    else:
        try:
            dumped = _adapter(type(record)).dump_python(record, round_trip=True)
        except Exception as e:
            raise SerializationError(
                f"Failed to serialize {type(record).__name__}: {e}"
            ) from e

    if not isinstance(dumped, dict):
        raise SerializationError(
            f"{type(record).__name__} does not serialize to named fields"
        )

    if columns is not None:
        dumped = {name: dumped[name] for name in columns if name in dumped}

    values = {}
    for name, value in dumped.items():
        try:
            values[name] = to_sql_value(value).value
        except SerializationError as e:
            raise SerializationError(f"Field '{name}': {e}") from e
    return values


def deserialize(row: Mapping[str, Any], record_type: type[T]) -> T:
    """Hydrate a result row into a record, matching columns by name.

    Args:
        row: Column name -> value mapping for one result row
        record_type: Target record type

    Returns:
        Validated record instance

    Raises:
        DeserializationError: If the row does not satisfy the record type
    """
    try:
        return _adapter(record_type).validate_python(dict(row))
    except (ValidationError, PydanticSchemaGenerationError) as e:
        raise DeserializationError(
            f"Failed to deserialize row into {getattr(record_type, '__name__', record_type)}: {e}"
        ) from e
