"""dbtable models package.

This package contains the Pydantic models and enums passed to table
operations.
"""

from dbtable.models.conflict import Conflict, ConflictResolution, Upsert
from dbtable.models.value import Scalar, SQLType, SQLValue, to_sql_value

__all__ = [
    # Conflict models
    "Conflict",
    "ConflictResolution",
    "Upsert",
    # Value models
    "Scalar",
    "SQLType",
    "SQLValue",
    "to_sql_value",
]
