"""Structured Logging — one JSON object per line on stderr.

Invariants:
    - Every line carries timestamp, level, logger name and message
    - Request fields (method, path, status_code, duration_ms, client_ip) and
      error fields (error_code, attempt) appear only when the record sets them
    - Request bodies are never logged (they carry names and email addresses)
    - setup_logging is idempotent: calling it again replaces its own handler

Design Decisions:
    - JSONFormatter over third-party libs: zero dependencies, full control
    - uvicorn's access log silenced: the request pipeline writes the access line
      with the fields above
"""

import logging
import json
from datetime import datetime, timezone

REQUEST_FIELDS = ("method", "path", "status_code", "duration_ms", "client_ip")
ERROR_FIELDS = ("error_code", "attempt")

_HANDLER_NAME = "landing-api"


def _extras(record: logging.LogRecord) -> dict:
    fields = {}
    for key in REQUEST_FIELDS + ERROR_FIELDS:
        val = record.__dict__.get(key)
        if val is not None:
            fields[key] = val
    return fields


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging in production."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc,
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **_extras(record),
        }
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


class TextFormatter(logging.Formatter):
    """Human-readable lines for local development; extras as key=value."""

    def __init__(self):
        super().__init__("%(asctime)s %(levelname)s %(name)s: %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        extras = _extras(record)
        if not extras:
            return line
        pairs = " ".join(f"{k}={v}" for k, v in extras.items())
        head, sep, tail = line.partition("\n")
        return f"{head} [{pairs}]{sep}{tail}"


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Install the application handler on the root logger."""
    root = logging.getLogger()
    for existing in list(root.handlers):
        if existing.get_name() == _HANDLER_NAME:
            root.removeHandler(existing)

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(JSONFormatter() if fmt == "json" else TextFormatter())
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    logging.getLogger("uvicorn.access").disabled = True
    return handler
