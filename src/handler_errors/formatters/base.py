"""
Base formatter interface.

A formatter turns a record (or its whole cause chain) into a string.
Options are given as keyword arguments: defaults at construction time,
overrides per call.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, ClassVar

from handler_errors.core.chain import map_chain
from handler_errors.core.record import HandlerError
from handler_errors.errors import InvalidArgumentError

if TYPE_CHECKING:
    from handler_errors.core.capabilities import FeatureFactory


def ensure_handler_error(error: Any) -> HandlerError:
    """Check that a value is a HandlerError.

    Raises:
        InvalidArgumentError: If it is not
    """
    if not isinstance(error, HandlerError):
        raise InvalidArgumentError(
            "The error must be an instance of HandlerError",
            argument="error",
            actual=error,
        )
    return error


class ErrorFormatter(ABC):
    """Base class for error formatters.

    Example:
        >>> class ShortFormatter(ErrorFormatter):
        ...     def format(self, error, **options):
        ...         return error.message
        >>> ShortFormatter().format_chain(HandlerError("a", HandlerError("b")))
        'a\\nb'
    """

    default_options: ClassVar[dict[str, Any]] = {}

    def __init__(self, **options: Any) -> None:
        """Initialize formatter.

        Args:
            **options: Overrides for ``default_options``
        """
        self._options = self._merge(dict(self.default_options), options)

    def _merge(self, base: dict[str, Any], overrides: dict[str, Any]) -> dict[str, Any]:
        unknown = set(overrides) - set(self.default_options)
        if unknown:
            raise InvalidArgumentError(
                f"Unknown {type(self).__name__} option(s): {', '.join(sorted(unknown))}",
                argument="options",
            )
        return {**base, **overrides}

    def resolve_options(self, options: dict[str, Any]) -> dict[str, Any]:
        """Merge per-call overrides into this formatter's options."""
        return self._merge(self._options, options)

    @property
    def options(self) -> dict[str, Any]:
        """Get the formatter's default options."""
        return dict(self._options)

    @abstractmethod
    def format(self, error: HandlerError, **options: Any) -> str:
        """Format a single record."""
        raise NotImplementedError

    def format_chain(self, error: HandlerError, **options: Any) -> str:
        """Format the cause chain, one record per line."""
        ensure_handler_error(error)
        return "\n".join(map_chain(error, lambda item, _: self.format(item, **options)))

    @classmethod
    def feature(cls, **defaults: Any) -> FeatureFactory:
        """Create a capability factory producing a formatter bound to an error.

        Example:
            >>> HandlerError.register_group("formatters", {"json": JsonFormatter.feature()})
            >>> HandlerError("boom").formatters.json.format()
        """
        formatter = cls(**defaults)

        def _factory(error: HandlerError) -> BoundFormatter:
            return BoundFormatter(formatter, error)

        return _factory


class BoundFormatter:
    """Formatter bound to one record, as exposed through capabilities."""

    __slots__ = ("_error", "_formatter")

    def __init__(self, formatter: ErrorFormatter, error: HandlerError) -> None:
        self._formatter = formatter
        self._error = error

    @property
    def formatter(self) -> ErrorFormatter:
        """Get the underlying formatter."""
        return self._formatter

    def format(self, **options: Any) -> str:
        """Format the bound record."""
        return self._formatter.format(self._error, **options)

    def format_chain(self, **options: Any) -> str:
        """Format the bound record's cause chain."""
        return self._formatter.format_chain(self._error, **options)

    def __str__(self) -> str:
        return self.format()
