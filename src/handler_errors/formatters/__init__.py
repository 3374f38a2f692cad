"""
Formatters that render records as text, JSON, HTML or ANSI-colored output.
"""

from handler_errors.formatters.ansi import AnsiFormatter
from handler_errors.formatters.base import (
    BoundFormatter,
    ErrorFormatter,
    ensure_handler_error,
)
from handler_errors.formatters.html_format import HtmlFormatter
from handler_errors.formatters.json_format import JsonFormatter
from handler_errors.formatters.text import TextFormatter

__all__ = [
    "AnsiFormatter",
    "BoundFormatter",
    "ErrorFormatter",
    "HtmlFormatter",
    "JsonFormatter",
    "TextFormatter",
    "ensure_handler_error",
]
