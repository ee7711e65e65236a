"""Insert conflict resolution models.

A conflict policy is chosen per insert call rather than per table, so one
table can serve both insert-or-update and insert-or-skip call sites.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, Field as PydanticField, field_validator


class ConflictResolution(str, Enum):
    """SQLite's native ``INSERT OR <policy>`` conflict clauses.

    ``NONE`` emits a plain ``INSERT``, which behaves like ``ABORT``: the
    conflicting statement fails and the engine reports the violation.
    """

    NONE = "none"
    IGNORE = "ignore"
    REPLACE = "replace"
    FAIL = "fail"
    ABORT = "abort"
    ROLLBACK = "rollback"

    @property
    def clause(self) -> Optional[str]:
        """SQL keyword used after ``INSERT OR``, or None for a plain insert."""
        if self is ConflictResolution.NONE:
            return None
        return self.value.upper()


class Upsert(BaseModel):
    """Raw ``ON CONFLICT`` clause appended after ``VALUES (...)``.

    The clause is trusted text and is never sanitized. It may refer to the
    new row through ``excluded.<column>``. The statement is handed to the
    driver as is, so colons inside string literals are kept literally.

    Examples:
        >>> Upsert(clause="ON CONFLICT(acct) DO UPDATE SET name = excluded.name")
    """

    clause: str = PydanticField(
        ...,
        description="ON CONFLICT clause, e.g. 'ON CONFLICT(id) DO NOTHING'",
    )

    model_config = {"extra": "forbid", "frozen": True}

    @field_validator("clause")
    @classmethod
    def validate_clause(cls, v: str) -> str:
        """Reject empty clauses."""
        v = v.strip()
        if not v:
            raise ValueError("Upsert clause must not be empty")
        return v


Conflict = Union[ConflictResolution, Upsert]
