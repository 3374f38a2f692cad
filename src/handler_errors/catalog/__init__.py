"""
Error catalogs and code resolution.
"""

from handler_errors.catalog.catalog import CATALOG_ENV_VAR, ErrorCatalog
from handler_errors.catalog.registry import (
    CatalogRegistry,
    get_catalog_registry,
    set_catalog_registry,
)
from handler_errors.catalog.resolver import (
    MAX_REPLACEMENTS,
    CatalogEntry,
    format_message,
    resolve_entry,
)

__all__ = [
    "CATALOG_ENV_VAR",
    "CatalogEntry",
    "CatalogRegistry",
    "ErrorCatalog",
    "MAX_REPLACEMENTS",
    "format_message",
    "get_catalog_registry",
    "resolve_entry",
    "set_catalog_registry",
]
