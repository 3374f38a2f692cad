"""
ANSI color formatter for terminal output.
"""

from __future__ import annotations

import json
from typing import Any, ClassVar

from handler_errors.core.chain import map_chain
from handler_errors.core.record import HandlerError
from handler_errors.core.serialize import format_timestamp
from handler_errors.core.severity import Severity
from handler_errors.formatters.base import ErrorFormatter, ensure_handler_error
from handler_errors.formatters.text import TextFormatter, tree_prefix

RESET = "\x1b[0m"
BOLD = "\x1b[1m"
DIM = "\x1b[2m"
RED = "\x1b[31m"
YELLOW = "\x1b[33m"
CYAN = "\x1b[36m"
GRAY = "\x1b[90m"
RED_BRIGHT = "\x1b[91m"

SEVERITY_COLORS: dict[Severity, str] = {
    Severity.CRITICAL: BOLD + RED_BRIGHT,
    Severity.ERROR: RED,
    Severity.WARNING: YELLOW,
    Severity.INFO: CYAN,
    Severity.DEBUG: GRAY,
}


class AnsiFormatter(ErrorFormatter):
    """Colored terminal formatter.

    With ``colors=False`` it falls back to plain ``TextFormatter`` output.
    """

    default_options: ClassVar[dict[str, Any]] = {
        "colors": True,
        "show_timestamp": False,
        "show_metadata": False,
    }

    def __init__(self, **options: Any) -> None:
        super().__init__(**options)
        self._fallback: TextFormatter | None = None

    def format(self, error: HandlerError, **options: Any) -> str:
        ensure_handler_error(error)
        opts = self.resolve_options(options)

        if not opts["colors"]:
            if self._fallback is None:
                self._fallback = TextFormatter()
            return self._fallback.format(
                error,
                show_timestamp=opts["show_timestamp"],
                show_metadata=opts["show_metadata"],
            )

        color = SEVERITY_COLORS[error.severity]
        tag = error.severity.value.upper()
        if error.code:
            tag = f"{tag} {error.code}"

        result = f"{color}[{tag}]{RESET} {BOLD}{RED}{error.name}{RESET}: {error.message}"

        if opts["show_timestamp"]:
            result = f"{GRAY}[{format_timestamp(error.timestamp)}]{RESET} {result}"

        if opts["show_metadata"] and error.metadata:
            metadata = json.dumps(dict(error.metadata), default=str)
            result += f"\n{DIM}Metadata: {metadata}{RESET}"

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
