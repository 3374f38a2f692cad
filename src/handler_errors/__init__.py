"""结构化错误建模：可链式追溯、可扩展能力、按错误码生成的错误记录。

handler-errors: Structured, chainable error records.

Records carry identity, severity, codes and metadata; causes link them into
chains; catalogs turn codes into messages; formatters and loggers attach to
error types as capability groups.
"""
from __future__ import annotations

from handler_errors.catalog import (
    CatalogEntry,
    CatalogRegistry,
    ErrorCatalog,
    get_catalog_registry,
    set_catalog_registry,
)
from handler_errors.code_error import CodeHandlerError, is_code_handler_error
from handler_errors.core import (
    CapabilityGroup,
    CapabilityRegistry,
    ErrorChain,
    HandlerError,
    SerializedChainEntry,
    SerializedError,
    Severity,
    get_capability_registry,
    get_chain,
    get_root,
    is_handler_error,
    map_chain,
    most_severe,
    set_capability_registry,
)
from handler_errors.errors import (
    AlreadyRegisteredError,
    FeatureNotRegisteredError,
    HandlerErrorsError,
    InvalidArgumentError,
    InvalidStateError,
    NotFoundError,
    ResourceExhaustedError,
)
from handler_errors.features import register_default_features
from handler_errors.formatters import (
    AnsiFormatter,
    ErrorFormatter,
    HtmlFormatter,
    JsonFormatter,
    TextFormatter,
)
from handler_errors.loggers import ConsoleLogger, ErrorLogger

__version__ = "0.1.0"

__all__ = [
    # Records
    "CodeHandlerError",
    "HandlerError",
    "Severity",
    "is_code_handler_error",
    "is_handler_error",
    # Chain
    "ErrorChain",
    "SerializedChainEntry",
    "SerializedError",
    "get_chain",
    "get_root",
    "map_chain",
    "most_severe",
    # Capabilities
    "CapabilityGroup",
    "CapabilityRegistry",
    "get_capability_registry",
    "register_default_features",
    "set_capability_registry",
    # Catalogs
    "CatalogEntry",
    "CatalogRegistry",
    "ErrorCatalog",
    "get_catalog_registry",
    "set_catalog_registry",
    # Formatters
    "AnsiFormatter",
    "ErrorFormatter",
    "HtmlFormatter",
    "JsonFormatter",
    "TextFormatter",
    # Loggers
    "ConsoleLogger",
    "ErrorLogger",
    # Library errors
    "AlreadyRegisteredError",
    "FeatureNotRegisteredError",
    "HandlerErrorsError",
    "InvalidArgumentError",
    "InvalidStateError",
    "NotFoundError",
    "ResourceExhaustedError",
    # Version
    "__version__",
]
