"""Logging setup driven by LoggingSettings."""

import json
import logging
from typing import Optional

from .config import LoggingSettings, get_settings

TEXT_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


class JsonFormatter(logging.Formatter):
    """Emit one JSON object per log record."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "time": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload)


def configure_logging(settings: Optional[LoggingSettings] = None) -> logging.Logger:
    """
    Configure the ``promptforge`` logger hierarchy.

    Safe to call repeatedly; the handler installed by a previous call
    is replaced rather than duplicated.

    Args:
        settings: Logging settings (defaults to the global settings)

    Returns:
        The package root logger
    """
    settings = settings or get_settings().logging

    handler = logging.StreamHandler()
    if settings.format.lower() == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))
    handler.set_name("promptforge")

    root = logging.getLogger("promptforge")
    for existing in list(root.handlers):
        if existing.get_name() == "promptforge":
            root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(settings.level.upper())
    return root
