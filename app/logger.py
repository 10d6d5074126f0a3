"""
Logging setup: one stdout handler per logger, JSON lines by default.
"""

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any

from app.config import Settings, get_settings

# attributes every LogRecord has; anything else came in via `extra=`
_RESERVED = set(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


class JSONFormatter(logging.Formatter):
    def __init__(self, service: str) -> None:
        super().__init__()
        self.service = service

    def format(self, record: logging.LogRecord) -> str:
        data: dict[str, Any] = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "service": self.service,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key, value in record.__dict__.items():
            if key not in _RESERVED and not key.startswith("_"):
                data[key] = value
        if record.exc_info and record.exc_info[1]:
            data["error"] = str(record.exc_info[1])
            data["error_type"] = type(record.exc_info[1]).__name__
        return json.dumps(data, default=str)


def configure_logging(logger: logging.Logger, settings: Settings) -> logging.Logger:
    """Replace the logger's handler with one built from `settings`."""
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    logger.setLevel(getattr(logging, settings.log_level.upper(), logging.INFO))
    handler = logging.StreamHandler(sys.stdout)
    if settings.log_json:
        handler.setFormatter(JSONFormatter(settings.service_name))
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s")
        )
    logger.addHandler(handler)
    logger.propagate = False
    return logger


def get_logger(name: str | None = None) -> logging.Logger:
    settings = get_settings()
    logger = logging.getLogger(name or settings.service_name)
    if not logger.handlers:
        configure_logging(logger, settings)
    return logger
