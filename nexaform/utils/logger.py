"""
NexaForm Logger
===============

Structured logging for form building and validation.

Records carry key=value context (form id, field path, rule name) so a
single validation pass can be followed through the log.
"""

from __future__ import annotations

import json
import logging
import sys
import traceback
from dataclasses import dataclass, field
from datetime import datetime
from enum import IntEnum
from pathlib import Path
from typing import Any, Dict, List, Optional, Union


class LogLevel(IntEnum):
    """Log levels."""

    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR
    CRITICAL = logging.CRITICAL

    @classmethod
    def parse(cls, value: Union[str, int, "LogLevel"]) -> "LogLevel":
        """Parse a level name ("info") or number (20)."""
        if isinstance(value, LogLevel):
            return value
        if isinstance(value, int):
            return cls(value)
        try:
            return cls[str(value).strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown log level: {value!r}") from None


@dataclass
class LogRecord:
    """
    Structured log record.

    Attributes:
        level: Log level
        message: Log message
        timestamp: Record timestamp
        context: Additional context
        exception: Exception info
    """

    level: LogLevel
    message: str
    timestamp: datetime = field(default_factory=datetime.now)
    context: Dict[str, Any] = field(default_factory=dict)
    exception: Optional[BaseException] = None
    logger_name: str = "nexaform"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        data: Dict[str, Any] = {
            "timestamp": self.timestamp.isoformat(),
            "level": self.level.name,
            "message": self.message,
            "logger": self.logger_name,
        }

        if self.context:
            data["context"] = self.context

        if self.exception:
            data["exception"] = {
                "type": type(self.exception).__name__,
                "message": str(self.exception),
            }

        return data

    def to_json(self) -> str:
        """Convert to JSON string."""
        return json.dumps(self.to_dict(), default=str)


class LogFormatter:
    """Base log formatter."""

    def format(self, record: LogRecord) -> str:
        """Format log record."""
        raise NotImplementedError


class TextFormatter(LogFormatter):
    """
    Plain text formatter.

    Example output:
        2024-01-15 10:30:45 [INFO] nexaform.form: Form rejected form_id=login
    """

    def __init__(
        self,
        format_string: Optional[str] = None,
        date_format: str = "%Y-%m-%d %H:%M:%S",
    ):
        self.format_string = format_string or "{timestamp} [{level}] {logger}: {message}"
        self.date_format = date_format

    def format(self, record: LogRecord) -> str:
        """Format as text."""
        message = record.message

        if record.context:
            context_str = " ".join(f"{k}={v}" for k, v in record.context.items())
            message = f"{message} {context_str}"

        output = self.format_string.format(
            timestamp=record.timestamp.strftime(self.date_format),
            level=record.level.name,
            message=message,
            logger=record.logger_name,
        )

        if record.exception:
            output += "\n" + "".join(
                traceback.format_exception(
                    type(record.exception),
                    record.exception,
                    record.exception.__traceback__,
                )
            )

        return output


class JsonFormatter(LogFormatter):
    """JSON formatter, one object per line."""

    def format(self, record: LogRecord) -> str:
        return record.to_json()


class LogHandler:
    """Base log handler."""

    def __init__(
        self,
        formatter: Optional[LogFormatter] = None,
        level: LogLevel = LogLevel.DEBUG,
    ):
        self.formatter = formatter or TextFormatter()
        self.level = level

    def handle(self, record: LogRecord) -> None:
        """Handle log record."""
        if record.level >= self.level:
            self.emit(record)

    def emit(self, record: LogRecord) -> None:
        """Emit formatted record."""
        raise NotImplementedError


class StreamHandler(LogHandler):
    """Stream output handler."""

    def __init__(
        self,
        stream: Any = None,
        formatter: Optional[LogFormatter] = None,
        level: LogLevel = LogLevel.DEBUG,
    ):
        super().__init__(formatter, level)
        self.stream = stream or sys.stderr

    def emit(self, record: LogRecord) -> None:
        self.stream.write(self.formatter.format(record) + "\n")
        self.stream.flush()


class FileHandler(LogHandler):
    """Append-only file handler."""

    def __init__(
        self,
        path: Union[str, Path],
        formatter: Optional[LogFormatter] = None,
        level: LogLevel = LogLevel.DEBUG,
    ):
        super().__init__(formatter or JsonFormatter(), level)
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def emit(self, record: LogRecord) -> None:
        with open(self.path, "a", encoding="utf-8") as f:
            f.write(self.formatter.format(record) + "\n")


class MemoryHandler(LogHandler):
    """Keeps records in a list. Handy for tests and debug toolbars."""

    def __init__(self, level: LogLevel = LogLevel.DEBUG):
        super().__init__(level=level)
        self.records: List[LogRecord] = []

    def emit(self, record: LogRecord) -> None:
        self.records.append(record)

    def messages(self) -> List[str]:
        return [record.message for record in self.records]


class Logger:
    """
    Structured logger.

    Example:
        logger = get_logger("nexaform.form")

        logger.info("Form rejected", form_id="login")

        # With context
        logger = logger.with_context(form_id="login")
        logger.debug("Rendering form")
    """

    def __init__(
        self,
        name: str = "nexaform",
        level: LogLevel = LogLevel.INFO,
        handlers: Optional[List[LogHandler]] = None,
    ):
        self.name = name
        self.level = level
        self._handlers = handlers if handlers is not None else []
        self._context: Dict[str, Any] = {}

    @property
    def handlers(self) -> List[LogHandler]:
        return self._handlers

    def add_handler(self, handler: LogHandler) -> "Logger":
        """Add log handler."""
        self._handlers.append(handler)
        return self

    def with_context(self, **context: Any) -> "Logger":
        """
        Create logger with additional context.

        The new logger shares handlers with this one.
        """
        new_logger = Logger(name=self.name, level=self.level, handlers=self._handlers)
        new_logger._context = {**self._context, **context}
        return new_logger

    def _log(
        self,
        level: LogLevel,
        message: str,
        exception: Optional[BaseException] = None,
        **context: Any,
    ) -> None:
        if level < self.level:
            return

        record = LogRecord(
            level=level,
            message=message,
            context={**self._context, **context},
            exception=exception,
            logger_name=self.name,
        )

        for handler in self._handlers:
            try:
                handler.handle(record)
            except Exception:
                # A broken handler must not break form handling.
                continue

    def debug(self, message: str, **context: Any) -> None:
        """Log debug message."""
        self._log(LogLevel.DEBUG, message, **context)

    def info(self, message: str, **context: Any) -> None:
        """Log info message."""
        self._log(LogLevel.INFO, message, **context)

    def warning(self, message: str, **context: Any) -> None:
        """Log warning message."""
        self._log(LogLevel.WARNING, message, **context)

    def error(
        self,
        message: str,
        exception: Optional[BaseException] = None,
        **context: Any,
    ) -> None:
        """Log error message."""
        self._log(LogLevel.ERROR, message, exception, **context)

    def critical(
        self,
        message: str,
        exception: Optional[BaseException] = None,
        **context: Any,
    ) -> None:
        """Log critical message."""
        self._log(LogLevel.CRITICAL, message, exception, **context)

    def log(self, level: Union[str, int, LogLevel], message: str, **context: Any) -> None:
        """Log with a level given by name or number."""
        self._log(LogLevel.parse(level), message, **context)


# Global logger registry
_loggers: Dict[str, Logger] = {}


def get_logger(
    name: str = "nexaform",
    level: Optional[LogLevel] = None,
) -> Logger:
    """
    Get or create logger.

    Child loggers ("nexaform.validation") share the handlers of the
    root "nexaform" logger unless configured separately.

    Args:
        name: Logger name
        level: Log level

    Returns:
        Logger instance
    """
    if name not in _loggers:
        root = _loggers.get("nexaform")

        if root is None:
            root = Logger(name="nexaform", level=level or LogLevel.INFO)
            root.add_handler(StreamHandler())
            _loggers["nexaform"] = root

        if name != "nexaform":
            _loggers[name] = Logger(
                name=name,
                level=level or root.level,
                handlers=root.handlers,
            )

    return _loggers[name]


def configure_logging(
    level: Union[str, int, LogLevel] = LogLevel.INFO,
    format: str = "text",
    log_file: Optional[str] = None,
) -> Logger:
    """
    Configure the package logger.

    Args:
        level: Log level
        format: Output format ("text" or "json")
        log_file: Optional log file path

    Returns:
        Configured root logger
    """
    level = LogLevel.parse(level)
    formatter: LogFormatter = JsonFormatter() if format == "json" else TextFormatter()

    handlers: List[LogHandler] = [StreamHandler(formatter=formatter, level=level)]
    if log_file:
        handlers.append(FileHandler(log_file, formatter=JsonFormatter(), level=level))

    logger = get_logger("nexaform")
    # children share this list, so replace its contents in place
    logger.handlers[:] = handlers

    for existing in _loggers.values():
        existing.level = level

    return logger
