"""Structured logging configuration for SearchBrief."""

from __future__ import annotations

import logging
import sys

from searchbrief.utils.time import utc_now

_CONTEXT_KEYS = (
    "request_id",
    "method",
    "path",
    "status_code",
    "duration_ms",
    "provider",
    "query_length",
    "document_count",
    "summary_length",
    "truncated",
)


class JSONFormatter(logging.Formatter):
    """Formats log records as structured entries with request/summary context."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": utc_now().isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info and record.exc_info[1]:
            log_entry["exception"] = self.formatException(record.exc_info)

        # Context fields come from `extra=` on the logging call.
        for key in _CONTEXT_KEYS:
            value = getattr(record, key, None)
            if value is not None:
                log_entry[key] = value

        # key=value rendering stays readable in dev consoles
        parts = [
            f"[{log_entry['level']:<7}]",
            log_entry["timestamp"],
            log_entry["logger"],
            log_entry["message"],
        ]
        for key in _CONTEXT_KEYS:
            if key in log_entry:
                parts.append(f"{key}={log_entry[key]}")

        if "exception" in log_entry:
            parts.append(f"\n{log_entry['exception']}")

        return " ".join(parts)


def setup_logging(level: str = "INFO") -> None:
    """Configure structured logging for the application."""
    root_logger = logging.getLogger()

    # Avoid adding handlers multiple times
    if root_logger.handlers:
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONFormatter())
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Quiet noisy third-party loggers
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
