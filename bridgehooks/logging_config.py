"""
Logging Setup
Installs a single stream handler on the root logger in text or JSON format.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Optional

from bridgehooks.config import LoggingSettings, get_settings

TEXT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


class JsonFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "time": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload)


def configure_logging(settings: Optional[LoggingSettings] = None) -> logging.Handler:
    """
    Configure root logging from settings.

    Replaces any handler installed by an earlier call, so it is safe to call
    again after `reload_settings()`.

    Args:
        settings: Logging settings (defaults to the cached global settings)

    Returns:
        The installed handler
    """
    settings = settings or get_settings().logging

    handler = logging.StreamHandler(sys.stderr)
    if settings.log_format == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))
    handler.set_name("bridgehooks")

    root = logging.getLogger()
    for existing in list(root.handlers):
        if existing.get_name() == "bridgehooks":
            root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(settings.log_level.upper())
    return handler
