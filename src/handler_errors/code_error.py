"""
Code-driven errors whose message and severity come from a catalog.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, ClassVar

from handler_errors.catalog import (
    CatalogEntry,
    ErrorCatalog,
    get_catalog_registry,
)
from handler_errors.core.arguments import resolve_arguments
from handler_errors.core.record import HandlerError
from handler_errors.core.severity import Severity
from handler_errors.errors import (
    ErrorContext,
    InvalidArgumentError,
    InvalidStateError,
)


class CodeHandlerError(HandlerError):
    """Error built from a catalog code.

    The catalog entry supplies the default message (formatted with the
    metadata, when given) and fixes the severity. A string second argument
    overrides the message.

    The severity shortcuts inherited from HandlerError (``critical``,
    ``error``, ``warning``, ``info``, ``debug``) raise InvalidArgumentError;
    construct the error from its code instead.

    Example:
        >>> CodeHandlerError.register_catalog(
        ...     {"VAL001": {"message": "Invalid {{ field }}", "severity": "warning"}}
        ... )
        >>> err = CodeHandlerError("VAL001", {"field": "email"})
        >>> err.to_string()
        '[WARNING VAL001] CodeHandlerError: Invalid email'
    """

    catalog_entry: CatalogEntry

    _frozen_fields: ClassVar[frozenset[str]] = HandlerError._frozen_fields | {
        "catalog_entry"
    }

    def __init__(
        self,
        code: str,
        argument2: Any = None,
        argument3: Any = None,
        argument4: Any = None,
        *,
        metadata: Mapping[str, Any] | None = None,
        cause: BaseException | None = None,
        severity: Severity | str | None = None,
    ) -> None:
        """Initialize from a catalog code.

        Args:
            code: Catalog code
            argument2: Message override, metadata or cause
            argument3: Metadata or cause
            argument4: Cause (only after a message override and metadata)
            metadata: Contextual data (keyword form)
            cause: Triggering exception (keyword form)
            severity: Not allowed; the catalog entry fixes the severity

        Raises:
            InvalidStateError: If no catalog is registered for this type
            InvalidArgumentError: If the code or arguments are malformed
            NotFoundError: If the code or a template key is missing
        """
        if severity is not None:
            raise InvalidArgumentError(
                "Severity of a code-driven error is fixed by its catalog entry",
                argument="severity",
                actual=severity,
            )
        if not isinstance(code, str):
            raise InvalidArgumentError("Invalid error code", argument="code", actual=code)

        catalog = type(self).get_catalog()
        if catalog is None:
            raise InvalidStateError(
                "The error catalog must be registered before creating "
                f"an instance of {type(self).__name__}",
                ErrorContext(
                    source="catalog",
                    hint=f"Call {type(self).__name__}.register_catalog(...) at startup",
                ),
            )

        # A string second argument is the message; the rest shifts left
        if isinstance(argument2, str):
            message: str | None = argument2
            rest = (argument3, argument4)
        else:
            message = None
            rest = (argument2, argument3)

        resolved = resolve_arguments(code.strip(), *rest, metadata=metadata, cause=cause)
        entry = catalog.get_entry(code, resolved.metadata)

        self.catalog_entry = entry
        super().__init__(
            message or entry.message,
            code=resolved.code,
            metadata=resolved.metadata,
            cause=resolved.cause,
            severity=entry.severity or Severity.ERROR,
        )

    @classmethod
    def register_catalog(
        cls,
        catalog: ErrorCatalog | Mapping[str, Any],
        *,
        replace: bool = False,
    ) -> type[CodeHandlerError]:
        """Register the catalog used by this class and its subclasses.

        Args:
            catalog: ErrorCatalog or plain code to entry mapping
            replace: Allow replacing a catalog already registered on this class

        Returns:
            This class, for chaining
        """
        if not isinstance(catalog, ErrorCatalog):
            catalog = ErrorCatalog(catalog)
        get_catalog_registry().register(cls, catalog, replace=replace)
        return cls

    @classmethod
    def clear_catalog(cls) -> bool:
        """Remove the catalog registered directly on this class."""
        return get_catalog_registry().unregister(cls)

    @classmethod
    def get_catalog(cls) -> ErrorCatalog | None:
        """Get the catalog for this class, inherited if not its own."""
        return get_catalog_registry().resolve(cls)

    @classmethod
    def _fixed_severity(cls, *args: Any, **kwargs: Any) -> HandlerError:
        raise InvalidArgumentError(
            f"Severity of {cls.__name__} is fixed by its catalog entry; "
            f"use {cls.__name__}(code, ...) instead of a severity shortcut",
            argument="severity",
        )

    critical = error = warning = info = debug = _fixed_severity


def is_code_handler_error(value: Any) -> bool:
    """Check if a value is a CodeHandlerError."""
    return isinstance(value, CodeHandlerError)
