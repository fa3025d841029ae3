"""JSON log output for applications sending PagerDuty events.

The library only emits records through module loggers; installing a handler is left
to the application, which may use `configure_logging`. Values passed via `extra=`
under a credential-like key are masked before they reach the output.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime
from typing import IO, Any

_STANDARD_RECORD_ATTRS: frozenset[str] = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))
) | {"message", "asctime"}

_REDACTED = "***"
_CREDENTIAL_KEYS: frozenset[str] = frozenset(
    {"authorization", "auth_token", "token", "service_key", "routing_key"}
)


def _redact(value: Any) -> Any:
    if isinstance(value, dict):
        return {
            key: _REDACTED if str(key).lower() in _CREDENTIAL_KEYS else _redact(item)
            for key, item in value.items()
        }
    if isinstance(value, list | tuple):
        return [_redact(item) for item in value]
    return value


class JsonFormatter(logging.Formatter):
    """One JSON object per record: time, level, logger, message, extras and traceback."""

    def format(self, record: logging.LogRecord) -> str:  # noqa: A003 (record)
        extra = {
            key: value
            for key, value in vars(record).items()
            if key not in _STANDARD_RECORD_ATTRS and not key.startswith("_")
        }

        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if extra:
            payload["extra"] = _redact(extra)
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        # Response models and other non-JSON values fall back to their str().
        return json.dumps(payload, ensure_ascii=False, default=str)


def configure_logging(level: str, *, stream: IO[str] | None = None) -> None:
    """Send all records to ``stream`` (stdout by default) as JSON lines.

    Calling it again replaces the previous handlers rather than adding to them.
    """

    handler = logging.StreamHandler(stream=stream or sys.stdout)
    handler.setFormatter(JsonFormatter())

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(level.upper())

    # urllib3 logs every connection at DEBUG.
    logging.getLogger("urllib3").setLevel(max(root.level, logging.INFO))
