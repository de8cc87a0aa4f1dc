"""Structured Logging — JSON and key=value formatters installed on the root logger.

Invariants:
    - Every record carries timestamp (record creation time, UTC), level, logger, message
    - Anything passed through `extra=` is emitted; None values are dropped
    - setup_logging is idempotent: a second call replaces the handler it installed
    - Outbound client libraries (httpx, aiosmtplib, sqlalchemy.engine) log at WARNING and up

Design Decisions:
    - Extras derived from the LogRecord instead of a whitelist, so services attach
      whatever ids they hold (resource_id, website_id, recipient, service)
    - "text" format keeps extras visible as key=value for local runs
"""

import json
import logging
from datetime import datetime, timezone

_RECORD_ATTRS = frozenset(logging.makeLogRecord({}).__dict__) | {"message", "asctime"}
_QUIET_LOGGERS = ("httpx", "httpcore", "aiosmtplib", "sqlalchemy.engine")


def record_extras(record: logging.LogRecord) -> dict:
    return {
        key: value for key, value in record.__dict__.items()
        if key not in _RECORD_ATTRS and not key.startswith("_") and value is not None
    }


class JSONFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **record_extras(record),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


class TextFormatter(logging.Formatter):
    def __init__(self):
        super().__init__("%(asctime)s %(levelname)s %(name)s: %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        extras = record_extras(record)
        if not extras:
            return line
        pairs = " ".join(f"{key}={value}" for key, value in sorted(extras.items()))
        head, sep, trace = line.partition("\n")
        return f"{head} [{pairs}]{sep}{trace}"


class _PvsHandler(logging.StreamHandler):
    """Marker type so setup_logging can find its own handler."""


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Install the API's stream handler on the root logger."""
    root = logging.getLogger()
    for existing in [h for h in root.handlers if isinstance(h, _PvsHandler)]:
        root.removeHandler(existing)

    handler = _PvsHandler()
    handler.setFormatter(JSONFormatter() if fmt == "json" else TextFormatter())
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    return handler
