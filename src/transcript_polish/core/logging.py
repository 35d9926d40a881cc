#!/usr/bin/env python3
"""
Structured logging for transcript_polish with context management.

Features:
- Environment-driven configuration (LOG_LEVEL, LOG_OUTPUT)
- JSON lines when TRANSCRIPT_POLISH_LOG_JSON is set, readable format otherwise
- Context propagation (e.g. a preview/session id) through contextvars
- Console output split across stdout/stderr with an optional rotating log file
"""
from __future__ import annotations

import json
import logging
import logging.handlers
import os
import sys
from contextvars import ContextVar
from pathlib import Path
from typing import Any, Dict, Optional

# Context variables for automatic context propagation
_log_context: ContextVar[Dict[str, Any]] = ContextVar("log_context", default={})

_RESERVED_RECORD_KEYS = frozenset(
    (
        "name", "msg", "args", "levelname", "levelno", "pathname", "filename", "module",
        "lineno", "funcName", "created", "msecs", "relativeCreated", "thread", "threadName",
        "processName", "process", "message", "exc_info", "exc_text", "stack_info", "context",
        "taskName",
    )
)


class StructuredFormatter(logging.Formatter):
    """
    Formatter that outputs JSON lines or a readable single-line format.
    """

    def __init__(self, use_json: bool = False):
        self.use_json = use_json
        super().__init__()

    def format(self, record: logging.LogRecord) -> str:
        context = _log_context.get({})

        # Merge context attached by ContextLogger
        if getattr(record, "context", None):
            context = {**context, **record.context}

        if self.use_json:
            return self._format_json(record, context)
        return self._format_readable(record, context)

    def _format_json(self, record: logging.LogRecord, context: Dict[str, Any]) -> str:
        """Format log record as JSON."""
        log_entry = {
            "timestamp": self.formatTime(record, datefmt="%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "module": record.name,
            "message": record.getMessage(),
        }

        if context:
            log_entry["context"] = context

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in _RESERVED_RECORD_KEYS:
                log_entry[key] = value

        return json.dumps(log_entry, default=str)

    def _format_readable(self, record: logging.LogRecord, context: Dict[str, Any]) -> str:
        """Format log record in human-readable format."""
        timestamp = self.formatTime(record, datefmt="%Y-%m-%d %H:%M:%S")

        context_str = ""
        if context:
            context_str = " | " + " ".join(f"{k}={v}" for k, v in context.items())

        base_msg = f"{timestamp} | {record.levelname:5} | {record.name} | {record.getMessage()}{context_str}"

        if record.exc_info:
            base_msg += f"\n{self.formatException(record.exc_info)}"

        return base_msg


class ContextLogger(logging.LoggerAdapter):
    """
    Logger adapter that automatically includes context in log messages.
    """

    def __init__(self, logger: logging.Logger, extra: Optional[Dict[str, Any]] = None):
        super().__init__(logger, extra or {})

    def process(self, msg: str, kwargs: Dict[str, Any]) -> tuple[str, Dict[str, Any]]:
        context = _log_context.get({})

        if self.extra:
            context = {**context, **self.extra}

        if kwargs.get("extra"):
            call_context = kwargs["extra"].pop("context", {})
            context = {**context, **call_context}

        kwargs.setdefault("extra", {})
        kwargs["extra"]["context"] = context

        return msg, kwargs


def get_log_level() -> str:
    """Get log level from environment or default to INFO."""
    level = os.environ.get("LOG_LEVEL", "INFO").upper()
    return level if level in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL") else "INFO"


def get_log_output() -> str:
    """Get log output mode from environment or default to console."""
    return os.environ.get("LOG_OUTPUT", "console").lower()


def use_json_logs() -> bool:
    return os.environ.get("TRANSCRIPT_POLISH_LOG_JSON", "").lower() in ("1", "true", "yes")


def setup_structured_logging(
    name: str,
    log_level: Optional[str] = None,
    log_output: Optional[str] = None,
    force_json: Optional[bool] = None,
    context: Optional[Dict[str, Any]] = None,
    log_filename: Optional[str] = None,
) -> ContextLogger:
    """
    Setup standardized structured logging.

    Args:
        name: Logger name (typically __name__)
        log_level: Log level override (DEBUG, INFO, WARNING, ERROR)
        log_output: Output mode override (console, file, both, none)
        force_json: Force JSON output regardless of environment
        context: Default context to include in all log messages
        log_filename: File name used when logging to a file

    Returns:
        ContextLogger instance with structured logging configured
    """
    logger = logging.getLogger(name)

    # Avoid duplicate handlers
    if logger.handlers:
        return ContextLogger(logger, context)

    level = (log_level or get_log_level()).upper()
    output = log_output or get_log_output()
    use_json = force_json if force_json is not None else use_json_logs()

    logger.setLevel(getattr(logging, level, logging.INFO))

    formatter = StructuredFormatter(use_json=use_json)

    if output in ("console", "both"):
        _setup_console_handlers(logger, formatter)

    if output in ("file", "both"):
        _setup_file_handler(logger, formatter, log_filename or f"{name.split('.')[-1]}.log")

    if output == "none":
        logger.addHandler(logging.NullHandler())

    # Prevent propagation to avoid duplicate messages
    logger.propagate = False

    return ContextLogger(logger, context)


def _setup_console_handlers(logger: logging.Logger, formatter: StructuredFormatter) -> None:
    """Setup console handlers with proper stream routing."""
    # INFO and DEBUG to stdout
    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.setFormatter(formatter)
    stdout_handler.setLevel(logging.DEBUG)
    stdout_handler.addFilter(lambda record: record.levelno < logging.WARNING)
    logger.addHandler(stdout_handler)

    # WARNING and ERROR to stderr
    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setFormatter(formatter)
    stderr_handler.setLevel(logging.WARNING)
    logger.addHandler(stderr_handler)


def _setup_file_handler(logger: logging.Logger, formatter: StructuredFormatter, log_filename: str) -> None:
    """Setup rotating file handler under TRANSCRIPT_POLISH_LOG_DIR (default ./logs)."""
    logs_dir = Path(os.environ.get("TRANSCRIPT_POLISH_LOG_DIR", Path.cwd() / "logs"))
    try:
        logs_dir.mkdir(parents=True, exist_ok=True)
    except OSError:
        # Read-only location, keep logging to the other handlers
        return

    file_handler = logging.handlers.RotatingFileHandler(
        logs_dir / log_filename,
        maxBytes=5 * 1024 * 1024,  # 5MB
        backupCount=3,
    )
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)


def set_context(**kwargs: Any) -> None:
    """
    Set logging context for the current execution context.

    Args:
        **kwargs: Context key-value pairs (e.g., preview_id="123")
    """
    _log_context.set({**_log_context.get({}), **kwargs})


def clear_context() -> None:
    """Clear all logging context for the current execution context."""
    _log_context.set({})


def get_context() -> Dict[str, Any]:
    """Get current logging context."""
    return _log_context.get({}).copy()


class LogContext:
    """
    Context manager for temporary logging context.

    Usage:
        with LogContext(command="format"):
            logger.info("Normalizing")  # Will include command=format
    """

    def __init__(self, **kwargs: Any):
        self.new_context = kwargs
        self.old_context: Dict[str, Any] = {}

    def __enter__(self):
        self.old_context = get_context()
        set_context(**{**self.old_context, **self.new_context})
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        _log_context.set(self.old_context)
