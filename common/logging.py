"""
Structured logging configuration for the form submission relay.
Provides correlation IDs, structured JSON logging, and proper error tracking.
"""

import json
import logging
import sys
import uuid
from typing import Optional, Dict, Any
from contextvars import ContextVar
from datetime import datetime, timezone

# Context variables for request tracking
request_id_var: ContextVar[Optional[str]] = ContextVar('request_id', default=None)
session_id_var: ContextVar[Optional[str]] = ContextVar('session_id', default=None)

_RESERVED_RECORD_KEYS = {
    'name', 'msg', 'args', 'levelname', 'levelno', 'pathname', 'filename',
    'module', 'exc_info', 'exc_text', 'stack_info', 'lineno', 'funcName',
    'created', 'msecs', 'relativeCreated', 'thread', 'threadName',
    'processName', 'process', 'getMessage', 'taskName', 'message',
}


class StructuredFormatter(logging.Formatter):
    """Custom formatter that outputs structured JSON logs."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        request_id = request_id_var.get()
        if request_id:
            log_entry["request_id"] = request_id

        session_id = session_id_var.get()
        if session_id:
            log_entry["session_id"] = session_id

        if record.exc_info:
            log_entry["exception"] = {
                "type": record.exc_info[0].__name__ if record.exc_info[0] else None,
                "message": str(record.exc_info[1]) if record.exc_info[1] else None,
                "traceback": self.formatException(record.exc_info)
            }

        # Extra fields passed via `extra=`
        for key, value in record.__dict__.items():
            if key not in _RESERVED_RECORD_KEYS:
                log_entry[key] = value

        return self._serialize_log_entry(log_entry)

    def _serialize_log_entry(self, log_entry: Dict[str, Any]) -> str:
        try:
            return json.dumps(log_entry, default=str, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            return f"LOG_SERIALIZATION_ERROR: {e} | Original message: {log_entry.get('message', 'N/A')}"


class RequestContextLogger:
    """Context manager for setting request-specific logging context."""

    def __init__(
        self,
        request_id: Optional[str] = None,
        session_id: Optional[str] = None
    ):
        self.request_id = request_id or str(uuid.uuid4())
        self.session_id = session_id
        self.tokens = []

    def __enter__(self):
        self.tokens.append(request_id_var.set(self.request_id))
        if self.session_id:
            self.tokens.append(session_id_var.set(self.session_id))
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        for token in reversed(self.tokens):
            token.var.reset(token)
        self.tokens = []


SIMPLE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# third-party loggers that would otherwise log every outbound AirTable call
QUIET_LOGGERS = ("uvicorn", "fastapi", "httpx", "httpcore")


def setup_logging(level: str = "INFO", format_type: str = "structured") -> None:
    """
    Route all logging to stdout, as JSON lines ('structured') or plain text ('simple').
    Existing root handlers are replaced so repeated calls do not duplicate output.
    """
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    numeric_level = getattr(logging, level.upper(), logging.INFO)
    root_logger.setLevel(numeric_level)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(numeric_level)
    if format_type == "structured":
        handler.setFormatter(StructuredFormatter())
    else:
        handler.setFormatter(logging.Formatter(SIMPLE_FORMAT))
    root_logger.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance with the specified name."""
    return logging.getLogger(name)


def log_performance(
    operation: str,
    duration_ms: float,
    success: bool = True,
    **kwargs
) -> None:
    """Log performance metrics for operations."""
    logger = get_logger("performance")
    logger.info(
        f"Performance metric: {operation}",
        extra={
            "operation": operation,
            "duration_ms": duration_ms,
            "success": success,
            **kwargs
        }
    )


def log_business_event(
    event_type: str,
    entity_type: str,
    entity_id: str,
    action: str,
    details: Optional[Dict[str, Any]] = None
) -> None:
    """Log business-related events."""
    logger = get_logger("business")
    logger.info(
        f"Business event: {event_type}",
        extra={
            "event_type": event_type,
            "entity_type": entity_type,
            "entity_id": entity_id,
            "action": action,
            "details": details or {}
        }
    )


def log_api_request(
    method: str,
    path: str,
    status_code: int,
    duration_ms: float,
    ip_address: Optional[str] = None,
    user_agent: Optional[str] = None
) -> None:
    """Log API request details."""
    logger = get_logger("api")
    logger.info(
        f"API request: {method} {path}",
        extra={
            "method": method,
            "path": path,
            "status_code": status_code,
            "duration_ms": duration_ms,
            "ip_address": ip_address,
            "user_agent": user_agent
        }
    )


def log_error(
    error: Exception,
    context: Optional[Dict[str, Any]] = None,
    logger: Optional[logging.Logger] = None
) -> None:
    """Log error with context information."""
    logger = logger or get_logger("error")

    error_context = {
        "error_type": type(error).__name__,
        "error_message": str(error),
        **(context or {})
    }

    if hasattr(error, 'context'):
        error_context["exception_context"] = error.context
    if hasattr(error, 'error_code'):
        error_context["error_code"] = error.error_code

    logger.error(
        f"Error occurred: {type(error).__name__}",
        extra=error_context,
        exc_info=error
    )
