"""
Formflow Utils Package
======================
"""

from __future__ import annotations

from formflow.utils.logger import (
    JsonFormatter,
    LogHandler,
    LogLevel,
    LogRecord,
    Logger,
    StreamHandler,
    TextFormatter,
    configure_logging,
    get_logger,
)

__all__ = [
    "JsonFormatter",
    "LogHandler",
    "LogLevel",
    "LogRecord",
    "Logger",
    "StreamHandler",
    "TextFormatter",
    "configure_logging",
    "get_logger",
]
