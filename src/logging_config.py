"""Centralized logging configuration for the task tagger."""

import json
import logging
import os
import re
from datetime import datetime, timezone

# Third-party loggers that are too chatty at INFO
NOISY_LOGGERS = ("urllib3", "requests_oauthlib", "oauthlib", "werkzeug")

TEXT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

_SECRET_PATTERNS = (
    re.compile(r"(Bearer\s+)[^\s'\",]+", re.IGNORECASE),
    re.compile(r"((?:password|client_secret|access_token|token)['\"]?\s*[:=]\s*['\"]?)[^\s'\",}]+", re.IGNORECASE),
)
REDACTED = "***"


def redact(message: str) -> str:
    """Mask bearer values and credential fields in a log message."""
    for pattern in _SECRET_PATTERNS:
        message = pattern.sub(lambda m: m.group(1) + REDACTED, message)
    return message


class RedactingFilter(logging.Filter):
    """Rewrites records so credentials never reach a handler."""

    def filter(self, record: logging.LogRecord) -> bool:
        try:
            message = record.getMessage()
        except (TypeError, ValueError):
            # Malformed %-args; let the handler report it as usual
            return True
        cleaned = redact(message)
        if cleaned != message:
            record.msg = cleaned
            record.args = None
        return True


class JSONFormatter(logging.Formatter):
    """One JSON object per line: timestamp, level, logger, message, exception."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info and record.exc_info[0] is not None:
            log_entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_entry)


def configure_logging(level_override: str | None = None) -> None:
    """Configure root logging from the environment.

    Args:
        level_override: If set, takes precedence over LOG_LEVEL.

    Environment variables:
        LOG_LEVEL: DEBUG, INFO, WARNING or ERROR. Defaults to INFO.
        LOG_FORMAT: "json" for JSON lines, anything else for text.
    """
    level_name = (level_override or os.getenv("LOG_LEVEL", "INFO")).upper()
    level = getattr(logging, level_name, logging.INFO)
    json_output = os.getenv("LOG_FORMAT", "text").lower() == "json"

    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.addFilter(RedactingFilter())
    handler.setFormatter(JSONFormatter() if json_output else logging.Formatter(TEXT_FORMAT))

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()
    root_logger.addHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
