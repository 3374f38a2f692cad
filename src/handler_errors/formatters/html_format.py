"""
HTML formatter for web display.
"""

from __future__ import annotations

import html
import json
import traceback
from typing import Any, ClassVar

from handler_errors.core.chain import map_chain
from handler_errors.core.record import HandlerError
from handler_errors.core.serialize import format_timestamp
from handler_errors.formatters.base import ErrorFormatter, ensure_handler_error


def css_class(name: str) -> str:
    """Lowercase the first letter of a class name for use as a CSS class."""
    if not name:
        return name
    return name[0].lower() + name[1:]


class HtmlFormatter(ErrorFormatter):
    """HTML formatter. All record text is escaped."""

    default_options: ClassVar[dict[str, Any]] = {
        "show_timestamp": True,
        "show_metadata": True,
        "show_traceback": False,
    }

    def format(self, error: HandlerError, **options: Any) -> str:
        ensure_handler_error(error)
        opts = self.resolve_options(options)

        lines = [
            f'<div class="error {css_class(error.name)}" '
            f'data-severity="{error.severity.value}">',
            f'  <h3 class="error-title">{html.escape(error.name)}</h3>',
            f'  <p class="error-message">{html.escape(error.message)}</p>',
        ]
        if error.code:
            lines.append(f'  <div class="error-code">{html.escape(error.code)}</div>')
        if opts["show_timestamp"]:
            lines.append(
                f'  <div class="error-timestamp">{format_timestamp(error.timestamp)}</div>'
            )
        if opts["show_metadata"] and error.metadata:
            metadata = html.escape(json.dumps(dict(error.metadata), default=str))
            lines.append(f'  <div class="error-metadata"><pre>{metadata}</pre></div>')
        if opts["show_traceback"] and error.__traceback__ is not None:
            tb = html.escape("".join(traceback.format_tb(error.__traceback__)))
            lines.append(f'  <pre class="error-traceback">{tb}</pre>')
        lines.append("</div>")

        return "\n".join(lines)

    def format_chain(self, error: HandlerError, **options: Any) -> str:
        ensure_handler_error(error)
        blocks = map_chain(error, lambda item, _: self.format(item, **options))
        return '<div class="error-chain">\n' + "\n".join(blocks) + "\n</div>"
