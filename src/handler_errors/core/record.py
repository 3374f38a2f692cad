"""
The error record type.

``HandlerError`` is an exception carrying identity, timestamp, severity,
an optional code, metadata and a link to the error that caused it. All of
those fields are fixed at construction; formatted and serialized views are
derived on demand.
"""

from __future__ import annotations

import uuid
from collections.abc import Mapping
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any, ClassVar

from handler_errors.core.arguments import resolve_arguments
from handler_errors.core.capabilities import (
    RESERVED_NAMES,
    CapabilityGroup,
    FeatureFactory,
    get_capability_registry,
)
from handler_errors.core.chain import ErrorChain, get_chain
from handler_errors.core.serialize import SerializedError, entry_fields
from handler_errors.core.severity import Severity
from handler_errors.errors import (
    ErrorContext,
    InvalidArgumentError,
    InvalidStateError,
    NotFoundError,
)

_FROZEN_FIELDS = RESERVED_NAMES | {"_capabilities", "_frozen"}


class HandlerError(Exception):
    """Structured, chainable error record.

    The constructor accepts the message followed by up to three positional
    arguments whose role is inferred from their shape (code string, metadata
    mapping, cause exception), or the same fields as keywords.

    Example:
        >>> try:
        ...     open("/missing")
        ... except OSError as exc:
        ...     err = HandlerError("Config unreadable", "CFG001", {"path": "/missing"}, exc)
        >>> err.to_string()
        '[ERROR CFG001] HandlerError: Config unreadable'
        >>> err.cause.message
        "[Errno 2] No such file or directory: '/missing'"

    Attributes:
        id: Unique identifier
        timestamp: UTC construction time
        severity: Severity level
        message: Human-readable message
        code: Optional stable error code
        metadata: Optional read-only contextual data
        cause: Optional record that triggered this one
    """

    id: str
    timestamp: datetime
    severity: Severity
    message: str
    code: str | None
    metadata: Mapping[str, Any] | None
    cause: HandlerError | None

    default_severity: ClassVar[Severity] = Severity.ERROR
    _frozen_fields: ClassVar[frozenset[str]] = _FROZEN_FIELDS

    def __init__(
        self,
        message: str,
        argument2: Any = None,
        argument3: Any = None,
        argument4: Any = None,
        *,
        code: str | None = None,
        metadata: Mapping[str, Any] | None = None,
        cause: BaseException | None = None,
        severity: Severity | str | None = None,
    ) -> None:
        """Initialize a record.

        Args:
            message: Non-empty human-readable message
            argument2: Code, metadata or cause
            argument3: Metadata or cause
            argument4: Cause
            code: Error code (keyword form)
            metadata: Contextual data (keyword form)
            cause: Triggering exception (keyword form)
            severity: Severity, defaults to ``default_severity``

        Raises:
            InvalidArgumentError: If the message or any argument is malformed
            InvalidStateError: If a registered capability group name collides
                with an instance attribute
        """
        if not isinstance(message, str) or not message:
            raise InvalidArgumentError(
                "message required",
                argument="message",
                actual=message,
            ).with_hint("Pass a non-empty string, e.g. HandlerError('An error occurred')")

        super().__init__(message)

        resolved = resolve_arguments(
            argument2,
            argument3,
            argument4,
            code=code,
            metadata=metadata,
            cause=cause,
        )

        self.id = str(uuid.uuid4())
        self.timestamp = datetime.now(timezone.utc)
        self.severity = (
            Severity.parse(severity) if severity is not None else self.default_severity
        )
        self.message = message
        self.code = resolved.code
        self.metadata = (
            MappingProxyType(dict(resolved.metadata))
            if resolved.metadata is not None
            else None
        )
        self.cause = resolved.cause
        self.__cause__ = resolved.cause

        self._capabilities = self._build_capabilities()
        self._frozen = True

    def _build_capabilities(self) -> dict[str, CapabilityGroup]:
        """Create one capability group per registered feature group."""
        groups: dict[str, CapabilityGroup] = {}
        resolved = get_capability_registry().resolve(type(self))
        for group, factories in resolved.items():
            if group in self.__dict__ or hasattr(type(self), group):
                raise InvalidStateError(
                    f"Cannot define feature group '{group}' on the error instance, "
                    "it conflicts with an existing property",
                    ErrorContext(source="capabilities", field_path=group),
                )
            groups[group] = CapabilityGroup(self, group, factories)
        return groups

    def _is_protected(self, name: str) -> bool:
        if name in self._frozen_fields:
            return True
        return name in self.__dict__.get("_capabilities", {})

    def __setattr__(self, name: str, value: Any) -> None:
        if self.__dict__.get("_frozen", False) and self._is_protected(name):
            raise AttributeError(f"{type(self).__name__}.{name} is read-only")
        super().__setattr__(name, value)

    def __delattr__(self, name: str) -> None:
        if self._is_protected(name):
            raise AttributeError(f"{type(self).__name__}.{name} is read-only")
        super().__delattr__(name)

    def __getattr__(self, name: str) -> Any:
        capabilities = self.__dict__.get("_capabilities")
        if capabilities is not None and name in capabilities:
            return capabilities[name]
        raise AttributeError(f"{type(self).__name__!r} object has no attribute {name!r}")

    @property
    def name(self) -> str:
        """Get the concrete error class name."""
        return type(self).__name__

    @property
    def chain(self) -> ErrorChain:
        """Get the chain operations bound to this record."""
        return ErrorChain(self)

    @property
    def capabilities(self) -> Mapping[str, CapabilityGroup]:
        """Get the capability groups of this record."""
        return MappingProxyType(self.__dict__.get("_capabilities", {}))

    def capability(self, group: str, key: str) -> Any:
        """Get a feature by group and key.

        Raises:
            NotFoundError: If the group is not registered for this type
            FeatureNotRegisteredError: If the key is not in the group
        """
        groups = self.__dict__.get("_capabilities", {})
        if group not in groups:
            raise NotFoundError(
                f"Capability group '{group}' is not registered",
                ErrorContext(source="capabilities", field_path=group),
                key=group,
            )
        return groups[group].get(key)

    @classmethod
    def register_group(
        cls, group: str, factories: Mapping[str, FeatureFactory]
    ) -> type[HandlerError]:
        """Register a feature group on this error type.

        The group is visible on instances of this class and its subclasses,
        unless a subclass registers its own group under the same name.

        Args:
            group: Group name, exposed as an attribute on instances
            factories: Feature key to factory taking the bound error

        Returns:
            This class, for chaining
        """
        get_capability_registry().register_group(cls, group, factories)
        return cls

    # Severity shortcuts

    @classmethod
    def critical(cls, *args: Any, **kwargs: Any) -> HandlerError:
        """Create an instance with critical severity."""
        return cls(*args, severity=Severity.CRITICAL, **kwargs)

    @classmethod
    def error(cls, *args: Any, **kwargs: Any) -> HandlerError:
        """Create an instance with error severity."""
        return cls(*args, severity=Severity.ERROR, **kwargs)

    @classmethod
    def warning(cls, *args: Any, **kwargs: Any) -> HandlerError:
        """Create an instance with warning severity."""
        return cls(*args, severity=Severity.WARNING, **kwargs)

    @classmethod
    def info(cls, *args: Any, **kwargs: Any) -> HandlerError:
        """Create an instance with info severity."""
        return cls(*args, severity=Severity.INFO, **kwargs)

    @classmethod
    def debug(cls, *args: Any, **kwargs: Any) -> HandlerError:
        """Create an instance with debug severity."""
        return cls(*args, severity=Severity.DEBUG, **kwargs)

    def serialize(self) -> SerializedError:
        """Serialize into the full-tree form, nesting causes recursively.

        A cause that loops back to a record already in the tree is left out.
        """
        serialized: SerializedError | None = None
        for item in reversed(get_chain(self)):
            serialized = SerializedError(**entry_fields(item), cause=serialized)
        assert serialized is not None
        return serialized

    def to_dict(self) -> dict[str, Any]:
        """Serialize into a JSON-ready dictionary."""
        return self.serialize().model_dump(exclude_none=True)

    def to_string(self) -> str:
        """Get the single-line form ``[SEVERITY CODE] Name: message``."""
        code = f" {self.code}" if self.code else ""
        return f"[{self.severity.value.upper()}{code}] {self.name}: {self.message}"

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return (
            f"{self.name}(id={self.id!r}, severity={self.severity.value!r}, "
            f"code={self.code!r}, message={self.message!r})"
        )


def is_handler_error(value: Any) -> bool:
    """Check if a value is a HandlerError."""
    return isinstance(value, HandlerError)
