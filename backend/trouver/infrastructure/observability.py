"""Structured Logging - one JSON object per log line for the Trouver API.

Invariants:
    - Every line carries timestamp (record creation time, UTC), level, logger, message
    - Request/document context passed via `extra=` is copied only when set
    - setup_logging() replaces the root handlers it installed before, so calling it
      twice (reload, repeated app construction) never duplicates output
"""

import json
import logging
from datetime import datetime, timezone

CONTEXT_FIELDS = (
    "error_code", "path", "principal_id", "document_id",
    "collection", "operation", "timeout_seconds",
)

TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"


class JSONFormatter(logging.Formatter):
    """Render a LogRecord as a single JSON document."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc,
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update({
            field: getattr(record, field)
            for field in CONTEXT_FIELDS
            if getattr(record, field, None) is not None
        })
        if record.levelno >= logging.ERROR:
            entry["source"] = f"{record.module}:{record.lineno}"
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


class _TrouverHandler(logging.StreamHandler):
    """Marker type so setup_logging() can find its own handler again."""


def setup_logging(level: str = "INFO", fmt: str = "json") -> None:
    root = logging.getLogger()
    for existing in [h for h in root.handlers if isinstance(h, _TrouverHandler)]:
        root.removeHandler(existing)

    handler = _TrouverHandler()
    handler.setFormatter(
        JSONFormatter() if fmt == "json" else logging.Formatter(TEXT_FORMAT),
    )
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
