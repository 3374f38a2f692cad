"""
Error catalogs: tables of code to message template and severity.

Catalogs are built in code or loaded from YAML/JSON files. The file path
can also come from the HANDLER_ERRORS_CATALOG environment variable.

Example file (YAML):

    AUTH001:
      message: "User {{ user }} is not allowed to {{ action }}"
      severity: warning
      http_status: 403
"""

from __future__ import annotations

import json
import os
from collections.abc import Iterator, Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Any

import yaml

from handler_errors.catalog.resolver import CatalogEntry, resolve_entry, to_entry
from handler_errors.errors import (
    AlreadyRegisteredError,
    ErrorContext,
    InvalidArgumentError,
    InvalidStateError,
    NotFoundError,
)

CATALOG_ENV_VAR = "HANDLER_ERRORS_CATALOG"


class ErrorCatalog:
    """Table of catalog entries keyed by error code.

    Example:
        >>> catalog = ErrorCatalog({"VAL001": {"message": "Bad {{ field }}"}})
        >>> catalog.get_entry("VAL001", {"field": "email"}).message
        'Bad email'
    """

    def __init__(
        self,
        entries: Mapping[str, CatalogEntry | Mapping[str, Any]] | None = None,
    ) -> None:
        """Initialize catalog.

        Args:
            entries: Initial code to entry mapping
        """
        self._entries: dict[str, CatalogEntry] = {}
        for code, entry in (entries or {}).items():
            self.add(code, entry)

    def add(
        self,
        code: str,
        entry: CatalogEntry | Mapping[str, Any],
        *,
        replace: bool = False,
    ) -> ErrorCatalog:
        """Add an entry.

        Args:
            code: Error code
            entry: Entry or mapping with at least ``message``
            replace: Allow overwriting an existing code

        Returns:
            Self for chaining

        Raises:
            InvalidArgumentError: If the code or entry is malformed
            AlreadyRegisteredError: If the code exists and ``replace`` is False
        """
        if not isinstance(code, str) or not code.strip():
            raise InvalidArgumentError("Invalid error code", argument="code", actual=code)

        key = code.strip()
        if key in self._entries and not replace:
            raise AlreadyRegisteredError(
                f"Error code {key} is already in the catalog",
                name=key,
            )
        self._entries[key] = to_entry(key, entry)
        return self

    def get_entry(
        self, code: str, metadata: Mapping[str, Any] | None = None
    ) -> CatalogEntry:
        """Resolve a code, formatting the message with ``metadata`` if given."""
        return resolve_entry(self._entries, code, metadata)

    @property
    def entries(self) -> Mapping[str, CatalogEntry]:
        """Get a read-only view of the entries."""
        return MappingProxyType(self._entries)

    def codes(self) -> list[str]:
        """Get all codes."""
        return list(self._entries)

    def __contains__(self, code: object) -> bool:
        return isinstance(code, str) and code.strip() in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    @classmethod
    def from_file(cls, path: str | Path) -> ErrorCatalog:
        """Load a catalog from a YAML or JSON file.

        Args:
            path: File path; ``.json`` is parsed as JSON, anything else as YAML

        Returns:
            ErrorCatalog with the file's entries

        Raises:
            NotFoundError: If the file does not exist
            InvalidArgumentError: If the file cannot be parsed or is not a
                mapping of codes to entries
        """
        file_path = Path(path)
        try:
            content = file_path.read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            raise NotFoundError(
                f"Catalog file not found: {file_path}",
                ErrorContext(source="catalog", field_path=str(file_path)),
                key=str(file_path),
            ) from exc

        try:
            if file_path.suffix == ".json":
                data = json.loads(content)
            else:
                data = yaml.safe_load(content)
        except (json.JSONDecodeError, yaml.YAMLError) as exc:
            raise InvalidArgumentError(
                f"Catalog file is not valid {file_path.suffix.lstrip('.') or 'yaml'}: {exc}",
                ErrorContext(source="catalog", field_path=str(file_path)),
            ) from exc

        if not isinstance(data, Mapping):
            raise InvalidArgumentError(
                "Catalog file must contain a mapping of codes to entries",
                ErrorContext(source="catalog", field_path=str(file_path)),
            )
        return cls(data)

    @classmethod
    def from_env(cls, var: str = CATALOG_ENV_VAR) -> ErrorCatalog:
        """Load a catalog from the file named by an environment variable.

        Raises:
            InvalidStateError: If the variable is not set
        """
        path = os.getenv(var)
        if not path:
            raise InvalidStateError(
                f"Environment variable {var} is not set",
                ErrorContext(source="catalog", hint=f"export {var}=/path/to/catalog.yaml"),
            )
        return cls.from_file(path)

    def __repr__(self) -> str:
        return f"ErrorCatalog(codes={self.codes()!r})"
