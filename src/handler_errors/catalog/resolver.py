"""
Code resolution and message templating.

Maps an error code to its catalog entry and substitutes ``{{ key }}``
placeholders in the entry message with scalar metadata values.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from handler_errors.core.arguments import is_metadata
from handler_errors.core.severity import Severity
from handler_errors.errors import (
    ErrorContext,
    InvalidArgumentError,
    NotFoundError,
    ResourceExhaustedError,
)

# Upper bound on substitutions in one message
MAX_REPLACEMENTS = 100

_PLACEHOLDER = re.compile(r"\{\{\s*([^}\s]+)\s*\}\}")


class CatalogEntry(BaseModel):
    """Catalog entry for one error code.

    Extra fields are preserved and available as attributes.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    message: str = Field(min_length=1, description="Message template")
    severity: Severity | None = Field(default=None, description="Default severity")

    @field_validator("severity", mode="before")
    @classmethod
    def parse_severity(cls, value: Any) -> Any:
        if value is None:
            return None
        return Severity.parse(value)

    @property
    def extra_fields(self) -> dict[str, Any]:
        """Get the fields beyond message and severity."""
        return dict(self.model_extra or {})


def to_entry(code: str, value: CatalogEntry | Mapping[str, Any]) -> CatalogEntry:
    """Validate a raw mapping into a CatalogEntry.

    Raises:
        InvalidArgumentError: If the mapping is not a valid entry
    """
    if isinstance(value, CatalogEntry):
        return value
    try:
        return CatalogEntry.model_validate(value)
    except ValidationError as exc:
        raise InvalidArgumentError(
            f"Invalid catalog entry for code {code!r}: {exc.error_count()} validation error(s)",
            ErrorContext(source="catalog", field_path=code, details={"errors": exc.errors()}),
        ) from exc


def format_message(template: str, metadata: Mapping[str, Any]) -> str:
    """Replace ``{{ key }}`` placeholders with metadata values.

    Malformed placeholders (unbalanced braces, whitespace inside the key)
    are left untouched.

    Args:
        template: Message template
        metadata: Values for the placeholders

    Returns:
        The formatted message

    Raises:
        InvalidArgumentError: If metadata is not a mapping or a value is not
            a string or number
        NotFoundError: If a placeholder key is missing from metadata
        ResourceExhaustedError: If more than MAX_REPLACEMENTS substitutions
            are needed
    """
    if not is_metadata(metadata):
        raise InvalidArgumentError(
            "Metadata must be a mapping", argument="metadata", actual=metadata
        )

    replacements = 0

    def _replace(match: re.Match[str]) -> str:
        nonlocal replacements
        replacements += 1
        if replacements > MAX_REPLACEMENTS:
            raise ResourceExhaustedError(
                "too many replacements in message template",
                limit=MAX_REPLACEMENTS,
            )

        key = match.group(1)
        if key not in metadata:
            raise NotFoundError(
                f"Metadata key '{key}' not provided for message template",
                ErrorContext(source="catalog", field_path=key),
                key=key,
            )

        value = metadata[key]
        # bool is an int subclass but not a directly stringifiable scalar here
        if isinstance(value, bool) or not isinstance(value, (str, int, float)):
            raise InvalidArgumentError(
                f"Metadata key '{key}' must be a string or number",
                argument=key,
                actual=value,
            )
        return str(value)

    return _PLACEHOLDER.sub(_replace, template)


def resolve_entry(
    table: Mapping[str, CatalogEntry | Mapping[str, Any]],
    code: str,
    metadata: Mapping[str, Any] | None = None,
) -> CatalogEntry:
    """Resolve a code against a table.

    The table is never modified; the returned entry is a copy whose message
    is formatted with ``metadata`` when given.

    Args:
        table: Code to entry mapping
        code: Error code, surrounding whitespace ignored
        metadata: Optional values for message placeholders

    Returns:
        A copy of the matching entry

    Raises:
        InvalidArgumentError: If the code is not a string or metadata is malformed
        NotFoundError: If the code has no entry
    """
    if not isinstance(code, str):
        raise InvalidArgumentError("Invalid error code", argument="code", actual=code)

    raw = table.get(code.strip())
    if raw is None:
        raise NotFoundError(
            f"Error code {code} not found in catalog",
            ErrorContext(source="catalog", field_path="code"),
            key=code,
        )

    entry = to_entry(code, raw)
    if metadata is None:
        return entry.model_copy()
    return entry.model_copy(update={"message": format_message(entry.message, metadata)})
