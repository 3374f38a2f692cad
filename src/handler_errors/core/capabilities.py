"""
Capability registry for optional per-error features.

Feature groups (for example ``formatters`` or ``loggers``) are registered
against an error type as a mapping of feature keys to factories. Each error
instance gets one read-only ``CapabilityGroup`` per group registered on its
type or any ancestor; features are built on first access, bound to that
error, and reused afterwards.
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Iterator, Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from handler_errors.errors import (
    AlreadyRegisteredError,
    ErrorContext,
    FeatureNotRegisteredError,
    InvalidArgumentError,
    InvalidStateError,
)

if TYPE_CHECKING:
    from handler_errors.core.record import HandlerError

FeatureFactory = Callable[["HandlerError"], Any]

# Record fields that can never be used as a group name
RESERVED_NAMES: frozenset[str] = frozenset(
    {
        "id",
        "timestamp",
        "severity",
        "message",
        "code",
        "metadata",
        "cause",
        "name",
        "chain",
        "capabilities",
    }
)


class CapabilityRegistry:
    """Registry of feature groups keyed by error type.

    Lookup walks the error type's MRO from the most specific class upward,
    so a subclass can override a group for itself and its descendants.

    Example:
        >>> registry = CapabilityRegistry()
        >>> registry.register_group(
        ...     HandlerError, "formatters", {"json": JsonFormatter.feature()}
        ... )
        >>> registry.groups_for(HandlerError)
        ['formatters']
    """

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._groups: dict[type, dict[str, Mapping[str, FeatureFactory]]] = {}

    def register_group(
        self,
        owner: type,
        group: str,
        factories: Mapping[str, FeatureFactory],
    ) -> CapabilityRegistry:
        """Register a feature group on an error type.

        Args:
            owner: Error type the group is attached to
            group: Group name, exposed as an attribute on instances
            factories: Feature key to factory taking the bound error

        Returns:
            Self for chaining

        Raises:
            InvalidArgumentError: If the name or a factory is invalid
            InvalidStateError: If the name collides with a record attribute
            AlreadyRegisteredError: If ``owner`` already registered ``group``
        """
        if not isinstance(owner, type):
            raise InvalidArgumentError("Owner must be a class", argument="owner", actual=owner)
        if not isinstance(group, str) or not group.isidentifier():
            raise InvalidArgumentError(
                f"Invalid capability group name: {group!r}",
                argument="group",
                actual=group,
            )
        if group in RESERVED_NAMES or group.startswith("_") or hasattr(owner, group):
            raise InvalidStateError(
                f"Cannot define feature group '{group}' on {owner.__name__}, "
                "it conflicts with an existing property",
                ErrorContext(source="capabilities", field_path=group),
            )

        owned = self._groups.setdefault(owner, {})
        if group in owned:
            raise AlreadyRegisteredError(
                f"Capability group '{group}' is already registered",
                name=group,
                owner=owner.__name__,
            )

        table: dict[str, FeatureFactory] = {}
        for key, factory in factories.items():
            if not isinstance(key, str) or not key.isidentifier():
                raise InvalidArgumentError(
                    f"Invalid feature key: {key!r}", argument=f"{group}.{key}"
                )
            if key.startswith("_") or hasattr(CapabilityGroup, key):
                raise InvalidStateError(
                    f"Feature key '{group}.{key}' conflicts with a group attribute",
                    ErrorContext(source="capabilities", field_path=f"{group}.{key}"),
                )
            if not callable(factory):
                raise InvalidArgumentError(
                    f"Feature factory for '{group}.{key}' is not callable",
                    argument=f"{group}.{key}",
                    actual=factory,
                )
            table[key] = factory

        owned[group] = MappingProxyType(table)
        return self

    def unregister_group(self, owner: type, group: str) -> bool:
        """Remove a group registered directly on ``owner``.

        Returns:
            True if removed, False if ``owner`` had no such group
        """
        owned = self._groups.get(owner)
        if owned and group in owned:
            del owned[group]
            return True
        return False

    def resolve(self, owner: type) -> dict[str, Mapping[str, FeatureFactory]]:
        """Resolve the effective groups for an error type.

        Args:
            owner: Constructing error type

        Returns:
            Group name to factories, taking the most specific registration
        """
        resolved: dict[str, Mapping[str, FeatureFactory]] = {}
        for klass in owner.__mro__:
            for group, table in self._groups.get(klass, {}).items():
                resolved.setdefault(group, table)
        return resolved

    def groups_for(self, owner: type) -> list[str]:
        """Get the effective group names for an error type."""
        return sorted(self.resolve(owner))

    def clear(self) -> None:
        """Remove all registrations."""
        self._groups.clear()

    def __len__(self) -> int:
        """Get the number of registrations across all types."""
        return sum(len(owned) for owned in self._groups.values())


class CapabilityGroup:
    """Read-only, lazily populated bag of features bound to one error.

    Accessing ``group.key`` (or ``group["key"]``) builds the feature with its
    factory on first use and returns the same object afterwards.
Factories may read sibling features of the same group while they build.
    """

    __slots__ = ("_error", "_factories", "_instances", "_lock", "_name")

    def __init__(
        self,
        error: HandlerError,
        name: str,
        factories: Mapping[str, FeatureFactory],
    ) -> None:
        object.__setattr__(self, "_error", error)
        object.__setattr__(self, "_name", name)
        object.__setattr__(self, "_factories", factories)
        object.__setattr__(self, "_instances", {})
        object.__setattr__(self, "_lock", threading.RLock())

    @property
    def name(self) -> str:
        """Get the group name."""
        return self._name

    def get(self, key: str) -> Any:
        """Get a feature, building it on first access.

        Raises:
            FeatureNotRegisteredError: If ``key`` is not registered
        """
        instances: dict[str, Any] = self._instances
        if key in instances:
            return instances[key]

        factory = self._factories.get(key)
        if factory is None:
            raise FeatureNotRegisteredError(self._name, key)

        with self._lock:
            if key not in instances:
                instances[key] = factory(self._error)
            return instances[key]

    def is_loaded(self, key: str) -> bool:
        """Check if a feature has already been built."""
        return key in self._instances

    def keys(self) -> list[str]:
        """Get the registered feature keys."""
        return list(self._factories)

    def __getattr__(self, key: str) -> Any:
        if key.startswith("_"):
            raise AttributeError(key)
        return self.get(key)

    def __getitem__(self, key: str) -> Any:
        return self.get(key)

    def __setattr__(self, key: str, value: Any) -> None:
        raise AttributeError(f"Capability group '{self._name}' is read-only")

    def __delattr__(self, key: str) -> None:
        raise AttributeError(f"Capability group '{self._name}' is read-only")

    def __contains__(self, key: object) -> bool:
        return key in self._factories

    def __iter__(self) -> Iterator[str]:
        return iter(self._factories)

    def __len__(self) -> int:
        return len(self._factories)

    def __repr__(self) -> str:
        return f"CapabilityGroup(name={self._name!r}, features={self.keys()!r})"


# Global capability registry
_global_registry: CapabilityRegistry | None = None


def get_capability_registry() -> CapabilityRegistry:
    """Get the global capability registry.

    Returns:
        Global CapabilityRegistry instance
    """
    global _global_registry
    if _global_registry is None:
        _global_registry = CapabilityRegistry()
    return _global_registry


def set_capability_registry(registry: CapabilityRegistry) -> None:
    """Set the global capability registry.

    Args:
        registry: CapabilityRegistry instance
    """
    global _global_registry
    _global_registry = registry
