"""
Logging setup - single-line JSON records on stdout.
"""
import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

# Attributes every LogRecord has; anything else came in through `extra=`.
_RESERVED = set(vars(logging.makeLogRecord({}))) | {"message", "asctime"}

SENSITIVE_KEYS = {"token", "password", "secret", "api_key", "authorization"}


class StructuredFormatter(logging.Formatter):
    """Format a log record as one JSON object."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for key, value in vars(record).items():
            if key not in _RESERVED and not key.startswith("_"):
                log_data[key] = value

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO") -> logging.Logger:
    """
    Configure the mcpbridge logger.

    Args:
        level: Log level name (DEBUG, INFO, ...)

    Returns:
        The configured package logger
    """
    logger = logging.getLogger("mcpbridge")
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Already configured
    if logger.handlers:
        return logger

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(StructuredFormatter())
    logger.addHandler(handler)
    logger.propagate = False

    return logger


def sanitize_for_log(data: Any) -> Any:
    """Redact credential-looking keys before logging tool arguments."""
    if isinstance(data, dict):
        return {
            key: "[REDACTED]" if str(key).lower() in SENSITIVE_KEYS else sanitize_for_log(value)
            for key, value in data.items()
        }
    if isinstance(data, list):
        return [sanitize_for_log(item) for item in data]
    return data


def log_tool_call(logger: logging.Logger, tool_name: str, arguments: dict[str, Any]) -> None:
    logger.info(
        f"Tool called: {tool_name}",
        extra={"tool": tool_name, "arguments": sanitize_for_log(arguments)}
    )


def log_tool_result(logger: logging.Logger, tool_name: str, success: bool, execution_time: float) -> None:
    logger.info(
        f"Tool completed: {tool_name}",
        extra={"tool": tool_name, "success": success, "execution_time": round(execution_time, 3)}
    )
