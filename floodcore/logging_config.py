"""
JSON log formatting for hosts embedding the core.

The engines only call logging.getLogger(__name__); the host decides whether
to install this formatter.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from floodcore.config import LOG_LEVEL


STRUCTURED_FIELDS = ("property_id", "caller", "error_code")


class JsonFormatter(logging.Formatter):
    """Timestamp, level, logger, message, plus structured extras when present."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)

        for key in STRUCTURED_FIELDS:
            if hasattr(record, key):
                payload[key] = getattr(record, key)

        return json.dumps(payload, ensure_ascii=False)


def configure_logging(level: str | None = None) -> logging.Logger:
    """
    Installs a single stdout JSON handler on the floodcore logger.

    Safe to call repeatedly; existing handlers are replaced.
    """
    level = (level or LOG_LEVEL).upper()

    logger = logging.getLogger("floodcore")
    logger.setLevel(level)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(JsonFormatter())
    logger.addHandler(handler)

    return logger
