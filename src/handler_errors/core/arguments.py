"""
Constructor argument resolution.

The record constructor accepts up to three polymorphic positional arguments
after the message (a code string, a metadata mapping or a cause exception).
``process_arguments`` is the only place their shape is interpreted; every
error type, including code-driven ones, goes through it.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from handler_errors.errors import InvalidArgumentError

if TYPE_CHECKING:
    from handler_errors.core.record import HandlerError


@dataclass(frozen=True)
class ProcessedArguments:
    """Normalized constructor input.

    Attributes:
        cause: Converted cause record, if any
        code: Error code, if any
        metadata: Contextual metadata, if any
    """

    cause: HandlerError | None = None
    code: str | None = None
    metadata: Mapping[str, Any] | None = None


def is_metadata(value: Any) -> bool:
    """Check if a value has the shape of metadata."""
    return isinstance(value, Mapping)


def is_cause(value: Any) -> bool:
    """Check if a value has the shape of a cause."""
    return isinstance(value, BaseException)


def convert_to_handler_error(value: Any) -> HandlerError | None:
    """Convert an exception into a HandlerError.

    Records pass through unchanged. Any other exception is wrapped in a new
    HandlerError that keeps only its message; the original exception stays
    reachable as the wrapper's ``__cause__`` for traceback display. Values
    that are not exceptions convert to ``None``.

    Args:
        value: Candidate cause

    Returns:
        A HandlerError, or None if the value is not an exception
    """
    from handler_errors.core.record import HandlerError

    if not is_cause(value):
        return None
    if isinstance(value, HandlerError):
        return value

    wrapper = HandlerError(str(value) or type(value).__name__)
    wrapper.__cause__ = value
    return wrapper


def _as_metadata(value: Any, argument: str) -> Mapping[str, Any] | None:
    if value is None:
        return None
    if is_metadata(value):
        return value
    raise InvalidArgumentError(
        "Metadata must be a mapping",
        argument=argument,
        actual=value,
    )


def process_arguments(
    argument2: Any = None,
    argument3: Any = None,
    argument4: Any = None,
) -> ProcessedArguments:
    """Disambiguate positional constructor arguments by shape.

    Precedence:
    1. ``argument2`` is a string: it is the code. ``argument3`` is the cause
       if it is an exception, otherwise metadata followed by an optional
       cause in ``argument4``.
    2. ``argument2`` is an exception: it is the cause; the rest is ignored.
    3. ``argument2`` is a mapping: it is the metadata and ``argument3`` may
       be the cause.

    Args:
        argument2: Code, metadata or cause
        argument3: Metadata or cause
        argument4: Cause

    Returns:
        ProcessedArguments with the resolved fields

    Raises:
        InvalidArgumentError: If a metadata position holds something that is
            neither a mapping nor an exception
    """
    cause: HandlerError | None = None
    code: str | None = None
    metadata: Mapping[str, Any] | None = None

    if isinstance(argument2, str):
        code = argument2

        if is_cause(argument3):
            cause = convert_to_handler_error(argument3)
        elif argument3 is not None:
            metadata = _as_metadata(argument3, "argument3")
            cause = convert_to_handler_error(argument4)
    elif is_cause(argument2):
        cause = convert_to_handler_error(argument2)
    elif argument2 is not None:
        metadata = _as_metadata(argument2, "argument2")
        cause = convert_to_handler_error(argument3)

    return ProcessedArguments(cause=cause, code=code, metadata=metadata)


def _pick(field: str, positional: Any, keyword: Any) -> Any:
    if keyword is None:
        return positional
    if positional is not None:
        raise InvalidArgumentError(
            f"'{field}' given both positionally and by keyword",
            argument=field,
        )
    return keyword


def resolve_arguments(
    argument2: Any = None,
    argument3: Any = None,
    argument4: Any = None,
    *,
    code: str | None = None,
    metadata: Mapping[str, Any] | None = None,
    cause: BaseException | None = None,
) -> ProcessedArguments:
    """Merge positional arguments with their keyword equivalents.

    Keywords are the explicit options form of the constructor; positional
    arguments are resolved with ``process_arguments``. Supplying the same
    field both ways is rejected.

    Raises:
        InvalidArgumentError: On conflicting or wrongly typed fields
    """
    positional = process_arguments(argument2, argument3, argument4)

    if code is not None and not isinstance(code, str):
        raise InvalidArgumentError("Code must be a string", argument="code", actual=code)
    if metadata is not None and not is_metadata(metadata):
        raise InvalidArgumentError(
            "Metadata must be a mapping", argument="metadata", actual=metadata
        )
    if cause is not None and not is_cause(cause):
        raise InvalidArgumentError(
            "Cause must be an exception", argument="cause", actual=cause
        )

    return ProcessedArguments(
        cause=_pick("cause", positional.cause, convert_to_handler_error(cause)),
        code=_pick("code", positional.code, code),
        metadata=_pick("metadata", positional.metadata, metadata),
    )
