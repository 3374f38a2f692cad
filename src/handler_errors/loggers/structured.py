"""
Structured logging for handler-errors.

Provides context-aware logging with sensitive data masking. Error loggers
write through this layer; the records, registries and resolvers never log
on their own.
"""

from __future__ import annotations

import json
import logging
import re
import sys
import time
from contextvars import ContextVar
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar

# Context variable for request-scoped logging context
_log_context: ContextVar[dict[str, Any] | None] = ContextVar(
    "handler_errors_log_context", default=None
)

REDACTED = "***REDACTED***"


class LogLevel(str, Enum):
    """Log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

    def to_logging_level(self) -> int:
        """Convert to standard logging level."""
        return getattr(logging, self.value)


@dataclass
class LogContext:
    """Request-scoped logging context.

    Attributes:
        request_id: Unique request identifier
        component: Component or handler emitting the errors
        extra: Additional context fields
    """

    request_id: str | None = None
    component: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result: dict[str, Any] = {}
        if self.request_id:
            result["request_id"] = self.request_id
        if self.component:
            result["component"] = self.component
        result.update(self.extra)
        return result

    def with_extra(self, **kwargs: Any) -> LogContext:
        """Create new context with additional fields."""
        return LogContext(
            request_id=self.request_id,
            component=self.component,
            extra={**self.extra, **kwargs},
        )


_CONTEXT_FIELDS = ("request_id", "component")


def get_log_context() -> LogContext:
    """Get current logging context."""
    data = _log_context.get()
    if not data:
        return LogContext()
    known = {k: data[k] for k in _CONTEXT_FIELDS if k in data}
    extra = {k: v for k, v in data.items() if k not in _CONTEXT_FIELDS}
    return LogContext(**known, extra=extra)


def set_log_context(context: LogContext) -> None:
    """Set logging context for the current execution context."""
    _log_context.set(context.to_dict())


def clear_log_context() -> None:
    """Clear logging context."""
    _log_context.set(None)


class SensitiveDataMasker:
    """Masks sensitive data in log messages and error metadata."""

    DEFAULT_PATTERNS: ClassVar[list[tuple[str, str]]] = [
        # API keys
        (r"(api[_-]?key[\"']?\s*[:=]\s*[\"']?)([^\"'\s]+)", r"\1" + REDACTED),
        # Bearer tokens
        (r"(Bearer\s+)([^\s]+)", r"\1" + REDACTED),
        # Authorization headers
        (r"(Authorization[\"']?\s*[:=]\s*[\"']?)([^\"'\s]+)", r"\1" + REDACTED),
        # Passwords in connection strings or key=value pairs
        (r"(password[\"']?\s*[:=]\s*[\"']?)([^\"'\s]+)", r"\1" + REDACTED),
        (r"(://[^:/\s]+:)([^@\s]+)(@)", r"\1" + REDACTED + r"\3"),
    ]

    SENSITIVE_KEYS: ClassVar[tuple[str, ...]] = (
        "key",
        "token",
        "secret",
        "password",
        "auth",
    )

    def __init__(self, patterns: list[tuple[str, str]] | None = None) -> None:
        """Initialize masker with patterns.

        Args:
            patterns: List of (pattern, replacement) tuples
        """
        self._patterns = [
            (re.compile(p, re.IGNORECASE), r)
            for p, r in (patterns or self.DEFAULT_PATTERNS)
        ]

    def mask(self, text: str) -> str:
        """Mask sensitive data in text.

        Args:
            text: Text to mask

        Returns:
            Masked text
        """
        result = text
        for pattern, replacement in self._patterns:
            result = pattern.sub(replacement, result)
        return result

    def mask_dict(self, data: dict[str, Any]) -> dict[str, Any]:
        """Mask sensitive data in dictionary.

        Values under keys that look like credentials are replaced entirely;
        other strings are pattern-masked; nested containers are walked.

        Args:
            data: Dictionary to mask

        Returns:
            Masked dictionary
        """
        result: dict[str, Any] = {}
        for key, value in data.items():
            key_lower = str(key).lower()
            if any(sensitive in key_lower for sensitive in self.SENSITIVE_KEYS):
                result[key] = REDACTED
            elif isinstance(value, str):
                result[key] = self.mask(value)
            elif isinstance(value, dict):
                result[key] = self.mask_dict(value)
            elif isinstance(value, list):
                result[key] = [
                    self.mask_dict(v) if isinstance(v, dict) else v for v in value
                ]
            else:
                result[key] = value
        return result


class JsonLogFormatter(logging.Formatter):
    """JSON log formatter."""

    def __init__(
        self,
        masker: SensitiveDataMasker | None = None,
        include_timestamp: bool = True,
    ) -> None:
        """Initialize formatter.

        Args:
            masker: Sensitive data masker
            include_timestamp: Whether to include timestamp
        """
        super().__init__()
        self._masker = masker or SensitiveDataMasker()
        self._include_timestamp = include_timestamp

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data: dict[str, Any] = {
            "level": record.levelname,
            "logger": record.name,
            "message": self._masker.mask(record.getMessage()),
        }

        if self._include_timestamp:
            log_data["timestamp"] = time.strftime(
                "%Y-%m-%dT%H:%M:%S", time.gmtime(record.created)
            ) + f".{int(record.msecs):03d}Z"

        # Add context
        context = get_log_context()
        if context_dict := context.to_dict():
            log_data["context"] = context_dict

        # Add extra fields
        if hasattr(record, "extra_fields"):
            log_data.update(self._masker.mask_dict(record.extra_fields))

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


class TextLogFormatter(logging.Formatter):
    """Human-readable text formatter."""

    def __init__(
        self,
        masker: SensitiveDataMasker | None = None,
        include_context: bool = True,
    ) -> None:
        """Initialize formatter.

        Args:
            masker: Sensitive data masker
            include_context: Whether to include context
        """
        super().__init__(
            fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        self._masker = masker or SensitiveDataMasker()
        self._include_context = include_context

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as text."""
        original_msg = record.msg
        record.msg = self._masker.mask(str(record.msg))

        result = super().format(record)

        record.msg = original_msg

        if self._include_context:
            context = get_log_context()
            if context_dict := context.to_dict():
                context_str = " ".join(f"{k}={v}" for k, v in context_dict.items())
                result = f"{result} | {context_str}"

        return result


class HandlerErrorsLogger:
    """Logger for handler-errors with structured logging support.

    The default level is DEBUG: error loggers apply their own severity
    threshold before anything reaches this layer.

    Example:
        >>> logger = HandlerErrorsLogger.get_logger("handler_errors.console")
        >>> logger.log(logging.WARNING, "Quota close to limit", code="Q001")
    """

    _loggers: ClassVar[dict[str, logging.Logger]] = {}
    _level: ClassVar[LogLevel] = LogLevel.DEBUG
    _formatter: ClassVar[logging.Formatter | None] = None
    _handler: ClassVar[logging.Handler | None] = None

    @classmethod
    def configure(
        cls,
        level: LogLevel = LogLevel.DEBUG,
        format: str = "text",
        stream: Any = None,
        masker: SensitiveDataMasker | None = None,
    ) -> None:
        """Configure global logging settings.

        Args:
            level: Log level
            format: Output format ('json' or 'text')
            stream: Output stream (default: stderr)
            masker: Sensitive data masker
        """
        cls._level = level

        if format == "json":
            cls._formatter = JsonLogFormatter(masker=masker)
        else:
            cls._formatter = TextLogFormatter(masker=masker)

        cls._handler = logging.StreamHandler(stream or sys.stderr)
        cls._handler.setFormatter(cls._formatter)
        cls._handler.setLevel(level.to_logging_level())

        # Update existing loggers
        for logger in cls._loggers.values():
            logger.handlers.clear()
            logger.addHandler(cls._handler)
            logger.setLevel(level.to_logging_level())

    @classmethod
    def reset(cls) -> None:
        """Drop configuration and detach handlers from created loggers."""
        for logger in cls._loggers.values():
            logger.handlers.clear()
        cls._loggers.clear()
        cls._level = LogLevel.DEBUG
        cls._formatter = None
        cls._handler = None

    @classmethod
    def get_logger(cls, name: str) -> HandlerErrorsLogger:
        """Get or create a logger.

        Args:
            name: Logger name

        Returns:
            Logger instance
        """
        if name not in cls._loggers:
            logger = logging.getLogger(name)
            logger.setLevel(cls._level.to_logging_level())

            if cls._handler:
                logger.handlers.clear()
                logger.addHandler(cls._handler)
            elif not logger.handlers:
                handler = logging.StreamHandler(sys.stderr)
                handler.setFormatter(TextLogFormatter())
                logger.addHandler(handler)

            logger.propagate = False
            cls._loggers[name] = logger

        return cls(cls._loggers[name])

    def __init__(self, logger: logging.Logger) -> None:
        """Initialize with underlying logger."""
        self._logger = logger

    @property
    def name(self) -> str:
        """Get the underlying logger name."""
        return self._logger.name

    def log(self, level: int, msg: str, exc_info: Any = False, **kwargs: Any) -> None:
        """Log a message at a numeric level with extra structured fields."""
        extra = {"extra_fields": kwargs} if kwargs else {}
        self._logger.log(level, msg, exc_info=exc_info, extra=extra)


def get_logger(name: str) -> HandlerErrorsLogger:
    """Get a logger instance.

    Args:
        name: Logger name

    Returns:
        Logger instance
    """
    return HandlerErrorsLogger.get_logger(name)
