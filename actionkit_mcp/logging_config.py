"""Structured JSON logging configuration for the ActionKit MCP bridge.

Provides consistent, structured logging across all components.
Secrets (signing keys, bearer tokens, parameter values) are never
included in log output.
"""

import logging
import sys
import time
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pythonjsonlogger import jsonlogger


class ActionKitJsonFormatter(jsonlogger.JsonFormatter):
    """JSON formatter stamping each record with its origin.

    The timestamp is the record's creation time in UTC, not formatting time.
    """

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord,
                   message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record.update(
            timestamp=datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            level=record.levelname,
            logger=record.name,
        )
        log_record["source"] = {
            "file": record.filename,
            "line": record.lineno,
            "function": record.funcName,
        }


def setup_logging(level: str = "INFO") -> None:
    """Send JSON logs to stderr; stdout belongs to the MCP stdio transport."""
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(ActionKitJsonFormatter(
        fmt="%(timestamp)s %(level)s %(name)s %(message)s"
    ))

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    root_logger.handlers = [handler]

    # Quiet down noisy libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance for the given name.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured logger instance
    """
    return logging.getLogger(name)


class ActionCallLogger:
    """Logs one remote action call: start, outcome and duration.

    Only the action, its integration and the shape of the call are logged.
    Parameter values and response bodies may carry user data and are left out.

    Usage:
        call_log = ActionCallLogger(logger, "SLACK_SEND_MESSAGE", "slack")
        call_log.start(parameter_count=2)
        ...
        call_log.failure("HTTP error; status: 401", status_code=401)
    """

    def __init__(self, logger: logging.Logger, action_name: str, integration: Optional[str] = None):
        self.logger = logger
        self.action_name = action_name
        self.integration = integration
        self._started: Optional[float] = None

    def start(self, parameter_count: int) -> "ActionCallLogger":
        self._started = time.monotonic()
        self.logger.info(
            "Action call started",
            extra=self._fields("action_start", parameter_count=parameter_count)
        )
        return self

    def success(self) -> None:
        self.logger.info("Action call succeeded", extra=self._fields("action_success"))

    def failure(self, error: str, status_code: Optional[int] = None) -> None:
        fields = self._fields("action_failure", error=error)
        if status_code is not None:
            fields["status_code"] = status_code
        self.logger.error("Action call failed", extra=fields)

    def _fields(self, event: str, **extra: Any) -> Dict[str, Any]:
        fields: Dict[str, Any] = {"action": self.action_name, "event": event}
        if self.integration:
            fields["integration"] = self.integration
        if self._started is not None:
            fields["duration_ms"] = int((time.monotonic() - self._started) * 1000)
        fields.update(extra)
        return fields
