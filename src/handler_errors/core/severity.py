"""
Severity levels and their ordering weights.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any

from handler_errors.errors import InvalidArgumentError


class Severity(str, Enum):
    """Severity of an error record.

    Ordered by weight: critical > error > warning > info > debug.
    """

    CRITICAL = "critical"
    """Requires immediate attention; the system may be failing."""

    ERROR = "error"
    """Requires attention but not necessarily immediate action."""

    WARNING = "warning"
    """Should be addressed but does not block."""

    INFO = "info"
    """Informational."""

    DEBUG = "debug"
    """Useful while debugging only."""

    @property
    def weight(self) -> int:
        """Numeric rank used for ordering comparisons."""
        return SEVERITY_WEIGHTS[self]

    def to_logging_level(self) -> int:
        """Convert to standard logging level."""
        return _LOGGING_LEVELS[self]

    @classmethod
    def parse(cls, value: Any) -> Severity:
        """Coerce a Severity or its string value into a Severity.

        Args:
            value: Severity instance or name such as "warning" or "WARNING"

        Returns:
            The matching Severity

        Raises:
            InvalidArgumentError: If the value is not a known severity
        """
        if isinstance(value, Severity):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise InvalidArgumentError(
            f"Invalid severity level: {value!r}",
            argument="severity",
            actual=value,
        ).with_hint("Use one of: " + ", ".join(s.value for s in cls))


SEVERITY_WEIGHTS: dict[Severity, int] = {
    Severity.CRITICAL: 5,
    Severity.ERROR: 4,
    Severity.WARNING: 3,
    Severity.INFO: 2,
    Severity.DEBUG: 1,
}

_LOGGING_LEVELS: dict[Severity, int] = {
    Severity.CRITICAL: logging.CRITICAL,
    Severity.ERROR: logging.ERROR,
    Severity.WARNING: logging.WARNING,
    Severity.INFO: logging.INFO,
    Severity.DEBUG: logging.DEBUG,
}
