"""Logging setup for applications using dbtable.

The library itself only creates named loggers under ``dbtable``; nothing
is attached on import. Applications that want dbtable's output formatted
from configuration call :func:`configure_logging` once at startup.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Optional

from dbtable.core.config import DBTableConfig, config as default_config

_HANDLER_NAME = "dbtable"
_TEXT_FORMAT = "%(asctime)s [%(name)s] %(levelname)s: %(message)s"


class JSONFormatter(logging.Formatter):
    """Format log records as single-line JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "time": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "logger": record.name,
            "level": record.levelname,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload)


def configure_logging(cfg: Optional[DBTableConfig] = None) -> logging.Logger:
    """Attach a stream handler to the ``dbtable`` logger.

    Calling this again replaces the handler installed by the previous call.

    Args:
        cfg: Configuration to apply (defaults to the global config)

    Returns:
        The configured ``dbtable`` logger
    """
    cfg = cfg or default_config
    logger = logging.getLogger("dbtable")
    logger.setLevel(cfg.log_level)

    for handler in list(logger.handlers):
        if handler.get_name() == _HANDLER_NAME:
            logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    if cfg.log_format == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(_TEXT_FORMAT))
    logger.addHandler(handler)
    return logger
