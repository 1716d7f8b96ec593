import json
import logging
from datetime import datetime, timezone
from typing import Optional

from organic_trace.config import Settings, get_settings

TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"

# Passed through ``extra=`` by the façade and view loaders.
CONTEXT_FIELDS = ("view", "table", "user_id")


class JsonFormatter(logging.Formatter):
    """One JSON object per line; context fields appear only when a call sets them."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(
            (name, getattr(record, name))
            for name in CONTEXT_FIELDS
            if getattr(record, name, None) is not None
        )
        if record.exc_info:
            entry["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=True, default=str)


def _formatter(settings: Settings) -> logging.Formatter:
    if settings.LOG_JSON:
        return JsonFormatter()
    return logging.Formatter(fmt=TEXT_FORMAT, datefmt=DATE_FORMAT)


def setup_logging(settings: Optional[Settings] = None) -> None:
    settings = settings or get_settings()
    handler = logging.StreamHandler()
    handler.setFormatter(_formatter(settings))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
