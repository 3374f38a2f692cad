"""
Error loggers and the structured logging layer they write through.
"""

from handler_errors.loggers.base import BoundLogger, ErrorLogger
from handler_errors.loggers.console import ConsoleLogger
from handler_errors.loggers.structured import (
    HandlerErrorsLogger,
    JsonLogFormatter,
    LogContext,
    LogLevel,
    SensitiveDataMasker,
    TextLogFormatter,
    clear_log_context,
    get_log_context,
    get_logger,
    set_log_context,
)

__all__ = [
    "BoundLogger",
    "ConsoleLogger",
    "ErrorLogger",
    "HandlerErrorsLogger",
    "JsonLogFormatter",
    "LogContext",
    "LogLevel",
    "SensitiveDataMasker",
    "TextLogFormatter",
    "clear_log_context",
    "get_log_context",
    "get_logger",
    "set_log_context",
]
