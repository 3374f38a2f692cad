"""
Serialized (wire/at-rest) forms of error records.

Field names are stable: ``id``, ``message``, ``name``, ``severity``,
``timestamp``, ``metadata``, ``code`` and, for the tree form, ``cause``.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from handler_errors.core.record import HandlerError


class SerializedChainEntry(BaseModel):
    """One record of a flattened cause chain (no nested cause)."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Unique record identifier")
    message: str = Field(description="Human-readable message")
    name: str = Field(description="Concrete error class name")
    severity: str = Field(description="Severity value, e.g. 'error'")
    timestamp: str = Field(description="ISO-8601 UTC construction time")
    metadata: dict[str, Any] | None = Field(default=None, description="Contextual data")
    code: str | None = Field(default=None, description="Stable error code")

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-ready dictionary without empty fields."""
        return self.model_dump(exclude_none=True)


class SerializedError(SerializedChainEntry):
    """Full-tree serialized record, with the cause nested recursively."""

    cause: SerializedError | None = Field(default=None, description="Serialized cause")


def format_timestamp(value: datetime) -> str:
    """Format a timestamp as ISO-8601 UTC with millisecond precision."""
    text = value.astimezone(timezone.utc).isoformat(timespec="milliseconds")
    return text.replace("+00:00", "Z")


def entry_fields(error: HandlerError) -> dict[str, Any]:
    """Collect the serializable fields of a single record."""
    return {
        "id": error.id,
        "message": error.message,
        "name": error.name,
        "severity": error.severity.value,
        "timestamp": format_timestamp(error.timestamp),
        "metadata": dict(error.metadata) if error.metadata is not None else None,
        "code": error.code,
    }


SerializedError.model_rebuild()
