"""
Logging helpers for the auth relay

Plain-text setup for local debugging and a JSON formatter for log
aggregation systems.
"""

import json
import logging
import sys
from typing import Any, Dict

SENSITIVE_KEYS = {"token", "authorization", "password", "secret", "api_key"}


class JsonFormatter(logging.Formatter):
    """Formats log records as JSON for structured logging"""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "ts": int(record.created * 1000),  # milliseconds
            "name": record.name,
            "level": record.levelname,
            "msg": record.getMessage(),
        }

        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)

        if hasattr(record, "method"):
            payload["method"] = record.method

        if hasattr(record, "status_code"):
            payload["status_code"] = record.status_code

        return json.dumps(payload, default=str)


def setup_logging(debug: bool = False) -> None:
    """
    Setup plain-text logging for the relay

    Args:
        debug: Enable debug level logging
    """
    level = logging.DEBUG if debug else logging.INFO

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logging.getLogger("auth_relay").setLevel(level)


def setup_structured_logger(level: int = logging.INFO) -> None:
    """
    Configure structured JSON logging for the relay.

    Args:
        level: Logging level (default: logging.INFO)

    Example:
        >>> setup_structured_logger(logging.DEBUG)
        >>> logging.getLogger("auth_relay").info("ready", extra={"method": "fetch"})
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonFormatter())

    relay_logger = logging.getLogger("auth_relay")
    relay_logger.setLevel(level)
    relay_logger.handlers = [handler]
    relay_logger.propagate = False


def sanitize_for_logging(data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Redact credentials from a dictionary before logging it.

    Example:
        >>> sanitize_for_logging({"url": "https://x", "token": "abc"})
        {'url': 'https://x', 'token': '***REDACTED***'}
    """
    sanitized = {}

    for key, value in data.items():
        if any(sensitive in str(key).lower() for sensitive in SENSITIVE_KEYS):
            sanitized[key] = "***REDACTED***"
        elif isinstance(value, dict):
            sanitized[key] = sanitize_for_logging(value)
        else:
            sanitized[key] = value

    return sanitized
