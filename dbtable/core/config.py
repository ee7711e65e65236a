"""Runtime settings read from the environment.

The library reads its environment variables here and nowhere else; other
modules consult the shared ``config`` object.

Environment Variables:
    DBTABLE_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
                       Default: WARNING

    DBTABLE_LOG_FORMAT: Log output format (text, json)
                        Default: text

    DBTABLE_LOG_STATEMENTS: Log every generated SQL statement at DEBUG level
                            Default: false

    DBTABLE_CHECK_COLUMNS: Check insert column lists against the table
                           definition and the serialized record before
                           executing. When disabled, mismatches are left
                           for the storage engine to reject.
                           Default: true
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from dbtable.exceptions import ConfigurationError


def _env_flag(key: str, default: bool) -> bool:
    # Unset or empty means default; anything but a truthy word is off
    raw = os.environ.get(key, "").strip().lower()
    return default if not raw else raw in {"1", "true", "yes", "on"}


def _env_text(key: str, default: str) -> str:
    return os.environ.get(key, "").strip() or default


@dataclass
class DBTableConfig:
    """Settings for logging and insert checks.

    Each field defaults from its ``DBTABLE_*`` variable at construction.
    Fields may be reassigned at runtime; the table layer reads them per call.

    Usage:
        from dbtable.core.config import config

        if config.check_columns:
            ...
    """

    # Logging
    log_level: str = field(default_factory=lambda: _env_text("DBTABLE_LOG_LEVEL", "WARNING").upper())
    log_format: str = field(default_factory=lambda: _env_text("DBTABLE_LOG_FORMAT", "text").lower())
    log_statements: bool = field(default_factory=lambda: _env_flag("DBTABLE_LOG_STATEMENTS", False))

    # Inserts
    check_columns: bool = field(default_factory=lambda: _env_flag("DBTABLE_CHECK_COLUMNS", True))

    def __post_init__(self):
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if self.log_level not in valid_levels:
            raise ConfigurationError(
                f"Invalid DBTABLE_LOG_LEVEL: {self.log_level}. "
                f"Must be one of: {sorted(valid_levels)}"
            )

        valid_formats = {"text", "json"}
        if self.log_format not in valid_formats:
            raise ConfigurationError(
                f"Invalid DBTABLE_LOG_FORMAT: {self.log_format}. "
                f"Must be one of: {sorted(valid_formats)}"
            )

    def as_dict(self) -> dict:
        """Current settings keyed by field name."""
        return {
            "log_level": self.log_level,
            "log_format": self.log_format,
            "log_statements": self.log_statements,
            "check_columns": self.check_columns,
        }


def load_config() -> DBTableConfig:
    """Build a fresh DBTableConfig from the current environment.

    The module-level ``config`` is not replaced; callers that change the
    environment after import either reassign its fields or keep the
    returned instance.
    """
    return DBTableConfig()


# Read once at import
config = load_config()
