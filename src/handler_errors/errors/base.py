"""库错误基类：提供结构化的库内部失败类型。

Base error classes for handler-errors.

These are the failures the library itself raises, not the records it models:
- HandlerErrorsError: Base class for all library failures
- InvalidArgumentError: Malformed constructor or resolver input
- NotFoundError: Missing catalog code, template key or feature
- AlreadyRegisteredError: Duplicate capability group or catalog registration
- InvalidStateError: Reserved-name collision or missing configuration
- ResourceExhaustedError: Template substitution exceeded its cap
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, ClassVar

if TYPE_CHECKING:
    from handler_errors.errors.codes import LibraryErrorCode


@dataclass
class ErrorContext:
    """Structured error context for diagnostics."""

    field_path: str | None = None
    """Name of the offending argument or key (e.g., 'metadata', 'formatters.json')"""

    details: dict[str, Any] = field(default_factory=dict)
    """Additional details about the failure"""

    source: str | None = None
    """Component that failed (e.g., 'arguments', 'catalog', 'capabilities')"""

    hint: str | None = None
    """Actionable hint for resolving the failure"""

    def __str__(self) -> str:
        parts = []
        if self.source:
            parts.append(f"[{self.source}]")
        if self.field_path:
            parts.append(f"at '{self.field_path}'")
        if self.hint:
            parts.append(f"(hint: {self.hint})")
        return " ".join(parts)


class HandlerErrorsError(Exception):
    """Base class for all handler-errors library failures.

    Attributes:
        message: Human-readable failure message
        context: Structured failure context
    """

    kind: ClassVar[str] = "unknown"

    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
    ) -> None:
        self.message = message
        self.context = context or ErrorContext()
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the full failure message."""
        ctx_str = str(self.context)
        if ctx_str:
            return f"{self.message} {ctx_str}"
        return self.message

    @property
    def library_code(self) -> LibraryErrorCode:
        """Return the stable library code for this failure kind."""
        from handler_errors.errors.codes import from_name

        return from_name(self.kind)

    def with_hint(self, hint: str) -> HandlerErrorsError:
        """Add a hint to this failure."""
        self.context.hint = hint
        return self


class InvalidArgumentError(HandlerErrorsError, ValueError):
    """Malformed input.

    Raised when:
    - The record message is missing, empty or not a string
    - Metadata is not a mapping
    - A code is not a string
    - A template value is not a string or number
    """

    kind = "invalid_argument"

    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
        *,
        argument: str | None = None,
        actual: Any = None,
    ) -> None:
        ctx = context or ErrorContext(source="arguments")
        if argument:
            ctx.field_path = argument
        if actual is not None:
            ctx.details["actual_type"] = type(actual).__name__
        super().__init__(message, ctx)
        self.argument = argument


class NotFoundError(HandlerErrorsError, LookupError):
    """A lookup key has no entry.

    Raised when:
    - A catalog code is not in the table
    - A template placeholder names a key absent from metadata
    - A capability feature key is not registered
    """

    kind = "not_found"

    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
        *,
        key: str | None = None,
    ) -> None:
        ctx = context or ErrorContext(source="lookup")
        if key is not None:
            ctx.details["key"] = key
        super().__init__(message, ctx)
        self.key = key


class FeatureNotRegisteredError(NotFoundError, AttributeError):
    """A capability group was asked for a feature key it does not have.

    Also an AttributeError so ``getattr(group, key, default)`` and ``hasattr``
    behave as expected on capability groups.
    """

    def __init__(self, group: str, key: str) -> None:
        super().__init__(
            f"Feature '{group}.{key}' is not registered",
            ErrorContext(source="capabilities", field_path=f"{group}.{key}"),
            key=key,
        )
        self.group = group


class AlreadyRegisteredError(HandlerErrorsError):
    """A registration would overwrite an existing one."""

    kind = "already_registered"

    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
        *,
        name: str | None = None,
        owner: str | None = None,
    ) -> None:
        ctx = context or ErrorContext(source="registry")
        if name:
            ctx.details["name"] = name
        if owner:
            ctx.details["owner"] = owner
        super().__init__(message, ctx)
        self.name = name


class InvalidStateError(HandlerErrorsError, RuntimeError):
    """The library is not in a state that allows the operation.

    Raised when:
    - A capability group name collides with a reserved record field
    - A code-driven error is built before a catalog is registered
    """

    kind = "invalid_state"


class ResourceExhaustedError(HandlerErrorsError):
    """A bounded operation exceeded its limit."""

    kind = "resource_exhausted"

    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
        *,
        limit: int | None = None,
    ) -> None:
        ctx = context or ErrorContext(source="catalog")
        if limit is not None:
            ctx.details["limit"] = limit
        super().__init__(message, ctx)
        self.limit = limit
