#!/usr/bin/env python3
"""
Basic record usage example.

This example demonstrates creating records, chaining causes and
rendering them with the built-in formatters.

Usage:
    python examples/basic_usage.py
"""

import json

from handler_errors import HandlerError, register_default_features


class DatabaseError(HandlerError):
    """Raised by the storage layer."""


def fetch_user(user_id: int) -> dict:
    try:
        raise ConnectionRefusedError("connection refused on port 5432")
    except ConnectionRefusedError as exc:
        raise DatabaseError.critical(
            "User lookup failed", "DB001", {"user_id": user_id}, exc
        ) from exc


def main() -> None:
    """Run basic usage example."""
    # Formatters and the console logger become available on every record
    register_default_features()

    try:
        fetch_user(42)
    except DatabaseError as db_error:
        error = HandlerError.warning("Profile page degraded", "WEB010", db_error)

    print("Single line:")
    print(error.to_string())
    print()

    print("Chain:")
    print(error.chain.to_string())
    print()

    print("Most severe:", error.chain.most_severe().to_string())
    print("Root cause:", error.chain.root().message)
    print()

    print("Text tree:")
    print(error.formatters.text.format_chain(show_timestamp=False))
    print()

    print("ANSI:")
    print(error.formatters.ansi.format_chain())
    print()

    print("Serialized:")
    print(json.dumps(error.to_dict(), indent=2))
    print()

    # Logged through the structured logger at the record's level
    error.loggers.console.log_chain()


if __name__ == "__main__":
    main()
