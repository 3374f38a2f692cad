#!/usr/bin/env python3
"""
Catalog-driven error example.

Codes are defined once in a catalog; messages are filled in from
metadata and severities come from the catalog entry.

Usage:
    python examples/catalog_errors.py
    HANDLER_ERRORS_CATALOG=errors.yaml python examples/catalog_errors.py
"""

import os

from handler_errors import (
    CodeHandlerError,
    ConsoleLogger,
    ErrorCatalog,
    JsonFormatter,
)
from handler_errors.loggers import HandlerErrorsLogger, LogContext, LogLevel, set_log_context

DEFAULT_CATALOG = {
    "AUTH001": {
        "message": "User {{ user }} is not allowed to {{ action }}",
        "severity": "warning",
        "http_status": 403,
    },
    "PAY001": {
        "message": "Payment of {{ amount }} {{ currency }} declined",
        "severity": "error",
        "http_status": 402,
    },
    "SYS001": {"message": "Service unavailable", "severity": "critical"},
}


class ApiError(CodeHandlerError):
    """Errors returned to API clients."""


def load_catalog() -> ErrorCatalog:
    """Load the catalog from HANDLER_ERRORS_CATALOG, or use the built-in one."""
    if os.getenv("HANDLER_ERRORS_CATALOG"):
        return ErrorCatalog.from_env()
    return ErrorCatalog(DEFAULT_CATALOG)


def main() -> None:
    """Run catalog example."""
    ApiError.register_catalog(load_catalog())
    HandlerErrorsLogger.configure(level=LogLevel.DEBUG, format="json")
    set_log_context(LogContext(request_id="req-7f3a", component="checkout"))

    logger = ConsoleLogger(min_severity="warning", formatter=JsonFormatter(indent=None))

    denied = ApiError("AUTH001", {"user": "ana", "action": "refund"})
    print(denied.to_string())
    print("HTTP status:", denied.catalog_entry.extra_fields.get("http_status"))

    declined = ApiError(
        "PAY001",
        "Card declined by issuer",
        {"amount": 120, "currency": "EUR", "card_token": "tok_4242"},
        denied,
    )
    print(declined.to_string())

    # card_token is redacted in the structured log output
    logger.log_chain(declined)


if __name__ == "__main__":
    main()
