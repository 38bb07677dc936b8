"""
Formflow Logger
===============

Structured logging with pluggable handlers.

Loggers are created per component with `get_logger` and write
context as key=value pairs (text) or as JSON objects.
"""

from __future__ import annotations

import logging
import sys
import traceback
from dataclasses import dataclass, field
from datetime import datetime
from enum import IntEnum
from typing import Any, Dict, List, Optional, Union

import orjson

from formflow.core.config import get_config


class LogLevel(IntEnum):
    """Log levels."""

    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR
    CRITICAL = logging.CRITICAL

    @classmethod
    def parse(cls, value: Union[str, int, "LogLevel"]) -> "LogLevel":
        """Parse a level name or number."""
        if isinstance(value, str):
            try:
                return cls[value.strip().upper()]
            except KeyError:
                raise ValueError(f"Unknown log level: {value!r}") from None
        return cls(value)


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
    logger_name: str = "formflow"

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
                "traceback": traceback.format_exception(
                    type(self.exception),
                    self.exception,
                    self.exception.__traceback__,
                ),
            }

        return data

    def to_json(self, pretty: bool = False) -> str:
        """Convert to JSON string."""
        option = orjson.OPT_INDENT_2 if pretty else 0
        return orjson.dumps(self.to_dict(), default=str, option=option).decode()


class LogFormatter:
    """Base log formatter."""

    def format(self, record: LogRecord) -> str:
        raise NotImplementedError


class TextFormatter(LogFormatter):
    """
    Plain text formatter.

    Example output:
        2024-01-15 10:30:45 [INFO] Form submitted valid=True fields=3
    """

    _colors = {
        LogLevel.DEBUG: "\033[36m",
        LogLevel.INFO: "\033[32m",
        LogLevel.WARNING: "\033[33m",
        LogLevel.ERROR: "\033[31m",
        LogLevel.CRITICAL: "\033[35m",
    }
    _reset = "\033[0m"

    def __init__(
        self,
        format_string: Optional[str] = None,
        date_format: str = "%Y-%m-%d %H:%M:%S",
        colors: bool = True,
    ):
        self.format_string = format_string or "{timestamp} [{level}] {logger}: {message}"
        self.date_format = date_format
        self.colors = colors and sys.stderr.isatty()

    def format(self, record: LogRecord) -> str:
        timestamp = record.timestamp.strftime(self.date_format)
        level = record.level.name

        if self.colors:
            level = f"{self._colors.get(record.level, '')}{level}{self._reset}"

        message = record.message
        if record.context:
            context_str = " ".join(f"{k}={v}" for k, v in record.context.items())
            message = f"{message} {context_str}"

        output = self.format_string.format(
            timestamp=timestamp,
            level=level,
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
    """
    JSON formatter for structured logging.

    Example output:
        {"timestamp":"2024-01-15T10:30:45","level":"INFO","message":"Form submitted"}
    """

    def __init__(self, pretty: bool = False):
        self.pretty = pretty

    def format(self, record: LogRecord) -> str:
        return record.to_json(pretty=self.pretty)


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
        if record.level >= self.level:
            self.emit(record)

    def emit(self, record: LogRecord) -> None:
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
        self.stream = stream

    def emit(self, record: LogRecord) -> None:
        # Resolve lazily so redirected stderr is honoured
        stream = self.stream or sys.stderr
        stream.write(self.formatter.format(record) + "\n")
        stream.flush()


class Logger:
    """
    Structured logger.

    Example:
        logger = get_logger("formflow.registry")

        logger.debug("Field registered", field="email", rules=2)
        logger.error("Custom predicate raised", exception=e)

        # With context
        form_logger = logger.with_context(form="signup")
        form_logger.info("Form submitted")
    """

    def __init__(
        self,
        name: str = "formflow",
        level: LogLevel = LogLevel.INFO,
        handlers: Optional[List[LogHandler]] = None,
    ):
        self.name = name
        self.level = level
        self._handlers = handlers if handlers is not None else []
        self._context: Dict[str, Any] = {}

    @property
    def handlers(self) -> List[LogHandler]:
        return list(self._handlers)

    def add_handler(self, handler: LogHandler) -> "Logger":
        self._handlers.append(handler)
        return self

    def remove_handler(self, handler: LogHandler) -> "Logger":
        self._handlers.remove(handler)
        return self

    def set_handlers(self, handlers: List[LogHandler]) -> "Logger":
        """Replace every handler in place."""
        self._handlers[:] = handlers
        return self

    def with_context(self, **context: Any) -> "Logger":
        """
        Create logger with additional context.

        The new logger shares handlers with this one.
        """
        new_logger = Logger(name=self.name, level=self.level, handlers=self._handlers)
        new_logger._context = {**self._context, **context}
        return new_logger

    def is_enabled_for(self, level: LogLevel) -> bool:
        return level >= self.level

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
                pass  # Don't let logging errors break validation

    def debug(self, message: str, **context: Any) -> None:
        self._log(LogLevel.DEBUG, message, **context)

    def info(self, message: str, **context: Any) -> None:
        self._log(LogLevel.INFO, message, **context)

    def warning(self, message: str, **context: Any) -> None:
        self._log(LogLevel.WARNING, message, **context)

    def error(
        self,
        message: str,
        exception: Optional[BaseException] = None,
        **context: Any,
    ) -> None:
        self._log(LogLevel.ERROR, message, exception, **context)

    def exception(self, message: str, **context: Any) -> None:
        """Log current exception."""
        self._log(LogLevel.ERROR, message, sys.exc_info()[1], **context)


_loggers: Dict[str, Logger] = {}


def _default_formatter(format: str, colors: bool) -> LogFormatter:
    if format == "json":
        return JsonFormatter()
    return TextFormatter(colors=colors)


def get_logger(name: str = "formflow", level: Optional[LogLevel] = None) -> Logger:
    """
    Get or create logger.

    New loggers take their level and format from the
    ``logging.*`` configuration keys.
    """
    if name not in _loggers:
        settings = get_config()
        logger = Logger(
            name=name,
            level=level or LogLevel.parse(settings.get("logging.level", "INFO")),
        )
        logger.add_handler(
            StreamHandler(
                formatter=_default_formatter(
                    settings.get("logging.format", "text"),
                    settings.get_bool("logging.colors", True),
                )
            )
        )
        _loggers[name] = logger

    return _loggers[name]


def configure_logging(
    level: Union[LogLevel, str, None] = None,
    format: Optional[str] = None,
    colors: Optional[bool] = None,
    handlers: Optional[List[LogHandler]] = None,
) -> None:
    """
    Reconfigure every formflow logger.

    Arguments left as None fall back to the ``logging.*``
    configuration keys.

    Args:
        level: Log level
        format: Output format ("text" or "json")
        colors: Enable colored text output
        handlers: Replace the default stream handler
    """
    settings = get_config()
    resolved_level = LogLevel.parse(
        level if level is not None else settings.get("logging.level", "INFO")
    )
    resolved_format = format or settings.get("logging.format", "text")
    resolved_colors = colors if colors is not None else settings.get_bool("logging.colors", True)

    for logger in _loggers.values():
        logger.level = resolved_level
        if handlers is not None:
            logger.set_handlers(list(handlers))
        else:
            logger.set_handlers([
                StreamHandler(formatter=_default_formatter(resolved_format, resolved_colors))
            ])
