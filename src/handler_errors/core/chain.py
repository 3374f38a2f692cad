"""
Cause chain traversal and aggregation.

Every function here starts from a record and follows ``cause`` links. The
walk keeps an identity-based visited list, so a chain that loops back onto
itself stops at the first repeated record instead of cycling forever.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import TYPE_CHECKING, TypeVar

from handler_errors.core.serialize import SerializedChainEntry, entry_fields
from handler_errors.core.severity import Severity

if TYPE_CHECKING:
    from handler_errors.core.record import HandlerError

T = TypeVar("T")
E = TypeVar("E")


def get_chain(error: HandlerError) -> list[HandlerError]:
    """Get the cause chain starting at ``error``.

    The result is never empty, contains each record once, and runs from the
    most recent record to the oldest cause.

    Args:
        error: Starting record

    Returns:
        List of records in chain order
    """
    chain = [error]
    seen = {id(error)}

    current = error
    while current.cause is not None:
        if id(current.cause) in seen:
            break
        chain.append(current.cause)
        seen.add(id(current.cause))
        current = current.cause

    return chain


def get_root(error: HandlerError) -> HandlerError:
    """Get the deepest cause in the chain."""
    return get_chain(error)[-1]


def map_chain(
    error: HandlerError, mapper: Callable[[HandlerError, int], T]
) -> list[T]:
    """Apply ``mapper(record, index)`` to each record in the chain.

    Args:
        error: Starting record
        mapper: Function receiving the record and its chain position

    Returns:
        Mapped values in chain order
    """
    return [mapper(item, index) for index, item in enumerate(get_chain(error))]


def most_severe(error: HandlerError) -> HandlerError:
    """Get the record with the highest severity weight.

    Ties resolve to the earliest record in chain order.
    """
    chain = get_chain(error)
    result = chain[0]
    for item in chain[1:]:
        if item.severity.weight > result.severity.weight:
            result = item
    return result


def filter_chain(
    error: HandlerError, min_severity: Severity | str
) -> list[HandlerError]:
    """Get the records at or above a severity threshold, in chain order."""
    threshold = Severity.parse(min_severity).weight
    return [item for item in get_chain(error) if item.severity.weight >= threshold]


def find_in_chain(error: HandlerError, error_type: type[E]) -> E | None:
    """Get the first record in the chain that is an instance of ``error_type``."""
    for item in get_chain(error):
        if isinstance(item, error_type):
            return item
    return None


def serialize_chain(error: HandlerError) -> list[SerializedChainEntry]:
    """Serialize the chain as a flat list (causes are not nested)."""
    return [SerializedChainEntry(**entry_fields(item)) for item in get_chain(error)]


def chain_to_string(error: HandlerError) -> str:
    """Join the single-line form of each record with newlines."""
    return "\n".join(item.to_string() for item in get_chain(error))


class ErrorChain:
    """Chain operations bound to one record.

    Example:
        >>> err = HandlerError("Outer", HandlerError.critical("Inner"))
        >>> err.chain.most_severe().message
        'Inner'
        >>> len(err.chain)
        2
    """

    __slots__ = ("_error",)

    def __init__(self, error: HandlerError) -> None:
        self._error = error

    def get(self) -> list[HandlerError]:
        """Get the records in chain order."""
        return get_chain(self._error)

    def root(self) -> HandlerError:
        """Get the deepest cause."""
        return get_root(self._error)

    def map(self, mapper: Callable[[HandlerError, int], T]) -> list[T]:
        """Map over the chain with ``mapper(record, index)``."""
        return map_chain(self._error, mapper)

    def most_severe(self) -> HandlerError:
        """Get the most severe record (first one on ties)."""
        return most_severe(self._error)

    def filter(self, min_severity: Severity | str) -> list[HandlerError]:
        """Get records at or above ``min_severity``."""
        return filter_chain(self._error, min_severity)

    def find(self, error_type: type[E]) -> E | None:
        """Get the first record of ``error_type``."""
        return find_in_chain(self._error, error_type)

    def serialize(self) -> list[SerializedChainEntry]:
        """Serialize as a flat list."""
        return serialize_chain(self._error)

    def to_string(self) -> str:
        """Get the newline-joined single-line forms."""
        return chain_to_string(self._error)

    def __iter__(self) -> Iterator[HandlerError]:
        return iter(get_chain(self._error))

    def __len__(self) -> int:
        return len(get_chain(self._error))

    def __str__(self) -> str:
        return chain_to_string(self._error)
