import json
import logging
import os
from datetime import datetime, timezone
from typing import Any, Dict

PACKAGE_LOGGER = "photo_message"


class JsonFormatter(logging.Formatter):
    """
    One JSON object per line for CloudWatch.

    Structured ``fields`` passed through ``extra`` are merged into the
    top level of the object; they never overwrite the base keys.
    """

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        fields = getattr(record, "fields", None) or {}
        for key, value in fields.items():
            payload.setdefault(key, value)

        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)

        # Events and Twilio resources are not always JSON-native
        return json.dumps(payload, default=str)


def _package_logger() -> logging.Logger:
    base = logging.getLogger(PACKAGE_LOGGER)
    if not base.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(JsonFormatter())
        base.addHandler(handler)
        base.setLevel(os.getenv("LOG_LEVEL", "INFO").upper())
        # The Lambda runtime installs its own root handler
        base.propagate = False
    return base


def get_logger(name: str) -> logging.Logger:
    """Child of the package logger; the JSON handler is attached once, on the parent."""
    _package_logger()
    return logging.getLogger(f"{PACKAGE_LOGGER}.{name}")


def log(logger: logging.Logger, message: str, level: int = logging.INFO, **fields: Any) -> None:
    """
    Log ``message`` with structured fields.
    Example:
        log(logger, "message.sent", sid="SMxxx", status="queued")
    """
    logger.log(level, message, extra={"fields": fields} if fields else None)
