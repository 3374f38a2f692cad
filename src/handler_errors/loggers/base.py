"""
Base error logger interface.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from handler_errors.core.severity import Severity
from handler_errors.errors import InvalidArgumentError
from handler_errors.formatters.base import ensure_handler_error

if TYPE_CHECKING:
    from handler_errors.core.capabilities import FeatureFactory
    from handler_errors.core.record import HandlerError
    from handler_errors.formatters.base import ErrorFormatter


class ErrorLogger(ABC):
    """Base class for error loggers.

    A logger emits records at or above its ``min_severity``. Without a
    formatter, records are rendered with ``HandlerError.to_string()``.
    """

    def __init__(
        self,
        min_severity: Severity | str = Severity.DEBUG,
        formatter: ErrorFormatter | None = None,
    ) -> None:
        """Initialize logger.

        Args:
            min_severity: Lowest severity that is emitted
            formatter: Formatter used to render records

        Raises:
            InvalidArgumentError: If ``min_severity`` is not a severity
        """
        self._min_severity = Severity.parse(min_severity)
        self._formatter = formatter

    @property
    def min_severity(self) -> Severity:
        """Get the severity threshold."""
        return self._min_severity

    @property
    def formatter(self) -> ErrorFormatter | None:
        """Get the formatter, if any."""
        return self._formatter

    def should_log(self, error: HandlerError) -> bool:
        """Check if a record meets the severity threshold."""
        return error.severity.weight >= self._min_severity.weight

    def render(self, error: HandlerError, **options: Any) -> str:
        """Render a single record."""
        if self._formatter is None:
            if options:
                raise InvalidArgumentError(
                    "Format options require a formatter", argument="options"
                )
            return error.to_string()
        return self._formatter.format(error, **options)

    def render_chain(self, error: HandlerError, **options: Any) -> str:
        """Render the record's cause chain.

        Raises:
            InvalidArgumentError: If the formatter cannot format chains
        """
        if self._formatter is None:
            if options:
                raise InvalidArgumentError(
                    "Format options require a formatter", argument="options"
                )
            return error.chain.to_string()
        format_chain = getattr(self._formatter, "format_chain", None)
        if not callable(format_chain):
            raise InvalidArgumentError(
                "Formatter does not support format_chain",
                argument="formatter",
                actual=self._formatter,
            )
        return format_chain(error, **options)

    def log(self, error: HandlerError, **options: Any) -> None:
        """Log a record if it meets the threshold.

        Args:
            error: Record to log
            **options: Per-call formatter options
        """
        ensure_handler_error(error)
        if not self.should_log(error):
            return
        self.emit(error, self.render(error, **options))

    def log_chain(self, error: HandlerError, **options: Any) -> None:
        """Log a record and its causes if the head meets the threshold."""
        ensure_handler_error(error)
        if not self.should_log(error):
            return
        self.emit(error, self.render_chain(error, **options))

    @abstractmethod
    def emit(self, error: HandlerError, text: str) -> None:
        """Write rendered text for a record."""
        raise NotImplementedError

    @classmethod
    def feature(cls, *args: Any, **kwargs: Any) -> FeatureFactory:
        """Create a capability factory producing a logger bound to an error."""
        logger = cls(*args, **kwargs)

        def _factory(error: HandlerError) -> BoundLogger:
            return BoundLogger(logger, error)

        return _factory


class BoundLogger:
    """Logger bound to one record, as exposed through capabilities."""

    __slots__ = ("_error", "_logger")

    def __init__(self, logger: ErrorLogger, error: HandlerError) -> None:
        self._logger = logger
        self._error = error

    @property
    def logger(self) -> ErrorLogger:
        """Get the underlying logger."""
        return self._logger

    def log(self, **options: Any) -> None:
        """Log the bound record."""
        self._logger.log(self._error, **options)

    def log_chain(self, **options: Any) -> None:
        """Log the bound record's cause chain."""
        self._logger.log_chain(self._error, **options)
