"""Structured Logging: JSON formatter and setup for production observability.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Extra fields (upstream, status_code, error_code, path) surfaced when present
    - JSON format in production, human-readable in development
    - Credentials are never passed to the logger

Design Decisions:
    - setup_logging called once on startup via lifespan; idempotent so
      repeated app start-ups (tests, reload) do not stack handlers
"""

import json
import logging
from datetime import datetime, timezone

_EXTRA_FIELDS = (
    "upstream", "method", "status_code", "error_code", "path", "duration_ms",
)


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging in production."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in _EXTRA_FIELDS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


class _TripgateHandler(logging.StreamHandler):
    """Marker subclass so setup_logging can find its own handler."""


def setup_logging(level: str = "INFO", fmt: str = "json") -> None:
    """Configure logging for the application."""
    for existing in list(logging.root.handlers):
        if isinstance(existing, _TripgateHandler):
            logging.root.removeHandler(existing)
    handler = _TripgateHandler()
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s - %(message)s",
        ))
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
