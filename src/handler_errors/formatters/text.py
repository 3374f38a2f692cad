"""
Plain text formatter.
"""

from __future__ import annotations

import json
from typing import Any, ClassVar

from handler_errors.core.chain import map_chain
from handler_errors.core.record import HandlerError
from handler_errors.core.serialize import format_timestamp
from handler_errors.formatters.base import ErrorFormatter, ensure_handler_error

CHAIN_INDENT = "    "
CHAIN_BRANCH = "└── "


def tree_prefix(index: int) -> str:
    """Get the indentation prefix for a chain position."""
    if index == 0:
        return ""
    return CHAIN_INDENT * (index - 1) + CHAIN_BRANCH


class TextFormatter(ErrorFormatter):
    """Simple text formatter.

    Output: ``[timestamp] Name: message`` followed by a ``Metadata:`` line
    when the record has metadata.
    """

    default_options: ClassVar[dict[str, Any]] = {
        "show_timestamp": True,
        "show_metadata": True,
    }

    def format(self, error: HandlerError, **options: Any) -> str:
        ensure_handler_error(error)
        opts = self.resolve_options(options)

        result = f"{error.name}: {error.message}"

        if opts["show_timestamp"]:
            result = f"[{format_timestamp(error.timestamp)}] {result}"

        if opts["show_metadata"] and error.metadata:
            result += f"\nMetadata: {json.dumps(dict(error.metadata), default=str)}"

        return result

    def format_chain(self, error: HandlerError, **options: Any) -> str:
        """Format the chain as an indented tree."""
        ensure_handler_error(error)
        return "\n".join(
            map_chain(
                error,
                lambda item, index: tree_prefix(index) + self.format(item, **options),
            )
        )
