"""Logging setup for the API process.

Everything goes to stdout through one handler on the root logger, either as
plain text or as one JSON object per line. Settings are read from the
environment directly because logging is configured before the app (and its
typed Settings) is built.
"""

from __future__ import annotations

import json
import logging
import logging.config
import os
import sys
from datetime import UTC, datetime
from typing import Any

# LogRecord attributes copied into JSON output when a caller passes them
# through ``extra=``.
EXTRA_FIELDS = (
    "request_id",
    "method",
    "path",
    "query",
    "status_code",
    "duration_ms",
    "client_ip",
    "user_agent",
    "error_type",
    "user_id",
    "role",
)

_TRUTHY = {"1", "true", "t", "yes", "y", "on"}


def env_flag(name: str, *, default: bool) -> bool:
    """Read a boolean environment variable."""
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUTHY


class JsonFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)

        for key in EXTRA_FIELDS:
            value = record.__dict__.get(key)
            if value is not None:
                payload[key] = value

        return json.dumps(payload, ensure_ascii=False, default=str)


def build_logging_config() -> dict[str, Any]:
    """Build the dictConfig for the current environment.

    Env vars:
    - LOG_LEVEL: DEBUG|INFO|WARNING|ERROR (default: INFO)
    - LOG_JSON: emit JSON lines instead of text (default: false)
    - LOG_REQUESTS: per-request log lines from the middleware (default: true)
    - LOG_UVICORN_ACCESS: uvicorn's own access log; off by default while
      LOG_REQUESTS is on so each request is logged once
    - LOG_SQL: echo SQL statements at INFO (default: false)
    """
    level = os.getenv("LOG_LEVEL", "INFO").upper()
    log_requests = env_flag("LOG_REQUESTS", default=True)
    uvicorn_access = env_flag("LOG_UVICORN_ACCESS", default=not log_requests)
    log_sql = env_flag("LOG_SQL", default=False)

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "text": {
                "format": "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
            },
            "json": {"()": "app.core.logging.JsonFormatter"},
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": level,
                "formatter": "json" if env_flag("LOG_JSON", default=False) else "text",
                "stream": sys.stdout,
            }
        },
        "root": {"handlers": ["console"], "level": level},
        "loggers": {
            "uvicorn": {"level": level, "propagate": True},
            "uvicorn.error": {"level": level, "propagate": True},
            "uvicorn.access": {
                "level": "INFO" if uvicorn_access else "WARNING",
                "propagate": True,
            },
            "sqlalchemy.engine": {
                "level": "INFO" if log_sql else "WARNING",
                "propagate": True,
            },
            # Google client libraries log every token refresh at INFO
            "google": {"level": "WARNING", "propagate": True},
            "urllib3": {"level": "WARNING", "propagate": True},
        },
    }


def configure_logging() -> None:
    """Apply the logging configuration to the stdlib logging tree."""
    logging.config.dictConfig(build_logging_config())
