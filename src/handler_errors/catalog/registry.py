"""
Per-type catalog registry.

Each code-driven error type may have its own catalog. Lookup walks the
type's MRO, so subclasses inherit their parent's catalog until they
register one of their own.
"""

from __future__ import annotations

from handler_errors.catalog.catalog import ErrorCatalog
from handler_errors.errors import AlreadyRegisteredError, InvalidArgumentError


class CatalogRegistry:
    """Registry of catalogs keyed by error type."""

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._catalogs: dict[type, ErrorCatalog] = {}

    def register(
        self,
        owner: type,
        catalog: ErrorCatalog,
        *,
        replace: bool = False,
    ) -> CatalogRegistry:
        """Register a catalog for an error type.

        Args:
            owner: Error type
            catalog: Catalog to use for the type and its subclasses
            replace: Allow replacing a catalog registered directly on ``owner``

        Returns:
            Self for chaining

        Raises:
            AlreadyRegisteredError: If ``owner`` already has a catalog
        """
        if not isinstance(catalog, ErrorCatalog):
            raise InvalidArgumentError(
                "Catalog must be an ErrorCatalog", argument="catalog", actual=catalog
            )
        if owner in self._catalogs and not replace:
            raise AlreadyRegisteredError(
                f"A catalog is already registered for {owner.__name__}",
                name="catalog",
                owner=owner.__name__,
            )
        self._catalogs[owner] = catalog
        return self

    def unregister(self, owner: type) -> bool:
        """Remove the catalog registered directly on ``owner``.

        Returns:
            True if removed, False if none was registered
        """
        return self._catalogs.pop(owner, None) is not None

    def resolve(self, owner: type) -> ErrorCatalog | None:
        """Get the catalog for a type, walking up its MRO."""
        for klass in owner.__mro__:
            catalog = self._catalogs.get(klass)
            if catalog is not None:
                return catalog
        return None

    def clear(self) -> None:
        """Remove all catalogs."""
        self._catalogs.clear()


# Global catalog registry
_global_registry: CatalogRegistry | None = None


def get_catalog_registry() -> CatalogRegistry:
    """Get the global catalog registry."""
    global _global_registry
    if _global_registry is None:
        _global_registry = CatalogRegistry()
    return _global_registry


def set_catalog_registry(registry: CatalogRegistry) -> None:
    """Set the global catalog registry."""
    global _global_registry
    _global_registry = registry
