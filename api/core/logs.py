"""
Process-wide logging setup.

Modules log through `logging.getLogger(__name__)` with `key=value` style
messages. This only wires the root handler once, at startup.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone

from core import settings

TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=True)


def configure_logging(level: str | None = None, format_type: str | None = None) -> None:
    level_name = (level or settings.env_str("LOG_LEVEL", "INFO")).upper()
    format_name = (format_type or settings.env_str("LOG_FORMAT", "text")).lower()

    handler = logging.StreamHandler(sys.stdout)
    if format_name == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))

    root = logging.getLogger()
    # Replace (not stack) handlers when called again, e.g. under reload.
    root.handlers = [handler]
    root.setLevel(getattr(logging, level_name, logging.INFO))
