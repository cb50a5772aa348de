"""Structured Logging — quote-aware formatters and idempotent setup.

Invariants:
    - Every record carries timestamp, level, logger name and message
    - Quote extras (cache_key, weight_oz, degraded_reason, evicted, ...) appear in
      both formats when set, and are omitted when unset
    - setup_logging replaces the handler it installed earlier; calling it twice
      (lifespan re-entry in tests) never duplicates output

Design Decisions:
    - JSON for production log shipping, key=value suffix for local text output
    - Handler tagged with an attribute, so handlers added by pytest or uvicorn stay put
"""

import logging
import json
from datetime import datetime, timezone


EXTRA_FIELDS = (
    "error_code", "path", "cache_key", "weight_oz",
    "degraded_reason", "evicted", "cached",
)
TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"
_HANDLER_MARK = "_shipquote_handler"


def quote_extras(record: logging.LogRecord) -> dict:
    """Known extra fields set on this record, in EXTRA_FIELDS order."""
    extras = {}
    for key in EXTRA_FIELDS:
        val = record.__dict__.get(key)
        if val is not None:
            extras[key] = val
    return extras


class JSONFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        log.update(quote_extras(record))
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


class TextFormatter(logging.Formatter):
    """Human-readable line with quote extras appended as key=value."""

    def __init__(self):
        super().__init__(TEXT_FORMAT)

    def formatMessage(self, record: logging.LogRecord) -> str:
        line = super().formatMessage(record)
        extras = quote_extras(record)
        if not extras:
            return line
        return line + " " + " ".join(f"{k}={v}" for k, v in extras.items())


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Install the shipquote handler on the root logger, replacing a previous one."""
    root = logging.getLogger()
    for existing in list(root.handlers):
        if getattr(existing, _HANDLER_MARK, False):
            root.removeHandler(existing)
            existing.close()

    handler = logging.StreamHandler()
    handler.setFormatter(JSONFormatter() if fmt == "json" else TextFormatter())
    setattr(handler, _HANDLER_MARK, True)
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    return handler
