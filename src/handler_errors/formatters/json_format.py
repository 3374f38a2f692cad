"""
JSON formatter.
"""

from __future__ import annotations

import json
import traceback
from typing import Any, ClassVar

from handler_errors.core.chain import map_chain
from handler_errors.core.record import HandlerError
from handler_errors.core.serialize import format_timestamp
from handler_errors.formatters.base import ErrorFormatter, ensure_handler_error


class JsonFormatter(ErrorFormatter):
    """Formatter that outputs records as JSON.

    A single record becomes a JSON object; a chain becomes a JSON array.
    """

    default_options: ClassVar[dict[str, Any]] = {
        "indent": 2,
        "show_timestamp": True,
        "show_metadata": True,
        "show_code": True,
        "show_severity": True,
        "show_traceback": False,
    }

    def to_payload(self, error: HandlerError, **options: Any) -> dict[str, Any]:
        """Build the JSON-ready dictionary for one record."""
        ensure_handler_error(error)
        opts = self.resolve_options(options)

        payload: dict[str, Any] = {"message": error.message, "name": error.name}
        if opts["show_severity"]:
            payload["severity"] = error.severity.value
        if opts["show_code"] and error.code:
            payload["code"] = error.code
        if opts["show_timestamp"]:
            payload["timestamp"] = format_timestamp(error.timestamp)
        if opts["show_metadata"]:
            payload["metadata"] = dict(error.metadata) if error.metadata else None
        if opts["show_traceback"] and error.__traceback__ is not None:
            payload["traceback"] = "".join(traceback.format_tb(error.__traceback__))
        return payload

    def format(self, error: HandlerError, **options: Any) -> str:
        payload = self.to_payload(error, **options)
        indent = self.resolve_options(options)["indent"]
        return json.dumps(payload, indent=indent, default=str)

    def format_chain(self, error: HandlerError, **options: Any) -> str:
        ensure_handler_error(error)
        payloads = map_chain(error, lambda item, _: self.to_payload(item, **options))
        indent = self.resolve_options(options)["indent"]
        return json.dumps(payloads, indent=indent, default=str)
