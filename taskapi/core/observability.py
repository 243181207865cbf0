# taskapi/core/observability.py

import json
import logging
from datetime import datetime, timezone


EXTRA_FIELDS = ("user_id", "todo_id", "error_code", "path")

_handler: logging.Handler | None = None


class JSONFormatter(logging.Formatter):
    """Formats log records as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in EXTRA_FIELDS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


def setup_logging(level: str = "INFO", fmt: str = "text"):
    global _handler

    if _handler is None:
        _handler = logging.StreamHandler()
        logging.root.addHandler(_handler)

    if fmt == "json":
        _handler.setFormatter(JSONFormatter())
    else:
        _handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s - %(message)s",
        ))
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
