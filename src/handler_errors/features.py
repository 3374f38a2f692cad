"""
Built-in capability groups.
"""

from __future__ import annotations

from handler_errors.core.record import HandlerError
from handler_errors.formatters import (
    AnsiFormatter,
    HtmlFormatter,
    JsonFormatter,
    TextFormatter,
)
from handler_errors.loggers import ConsoleLogger

FORMATTERS_GROUP = "formatters"
LOGGERS_GROUP = "loggers"


def register_default_features(
    target: type[HandlerError] = HandlerError,
) -> type[HandlerError]:
    """Register the built-in formatters and loggers on an error type.

    After this call every instance of ``target`` (and its subclasses)
    exposes ``error.formatters.text``, ``.json``, ``.html``, ``.ansi`` and
    ``error.loggers.console``.

    Args:
        target: Error type to extend

    Returns:
        The target type

    Raises:
        AlreadyRegisteredError: If ``target`` already has either group
    """
    target.register_group(
        FORMATTERS_GROUP,
        {
            "text": TextFormatter.feature(),
            "json": JsonFormatter.feature(),
            "html": HtmlFormatter.feature(),
            "ansi": AnsiFormatter.feature(),
        },
    )
    target.register_group(
        LOGGERS_GROUP,
        {"console": ConsoleLogger.feature(formatter=TextFormatter(show_timestamp=False))},
    )
    return target
