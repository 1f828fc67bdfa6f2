"""Structured Logging — one JSON line per event for the users service.

Invariants:
    - Every line carries timestamp, level, logger name and message
    - Request and store context (user_id, operation, error_code, path, status) is
      emitted only when the call site passed it via extra=
    - setup_logging is idempotent: a restarted lifespan replaces the service
      handler instead of stacking a second one

Design Decisions:
    - Formatter built on stdlib logging, so uvicorn and SQLAlchemy records flow
      through the same handler without adapters
    - LOG_FORMAT=text keeps the console readable during local runs
"""

import logging
import json
from datetime import datetime, timezone


EXTRA_FIELDS = ("user_id", "operation", "error_code", "path", "status")
TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s — %(message)s"


class JSONFormatter(logging.Formatter):
    """Render a record as a single JSON object."""

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
        return json.dumps(log, ensure_ascii=False, default=str)


class _ServiceHandler(logging.StreamHandler):
    """Marker type so setup_logging can find the handler it installed."""


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Install the service handler on the root logger, replacing a previous one."""
    root = logging.getLogger()
    for existing in [h for h in root.handlers if isinstance(h, _ServiceHandler)]:
        root.removeHandler(existing)

    handler = _ServiceHandler()
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    return handler
