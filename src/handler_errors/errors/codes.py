"""
Stable codes for the library's own failure kinds.

Each failure class in ``handler_errors.errors.base`` maps to one code so
callers can match on a string instead of an exception type.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class LibraryErrorCode:
    """Library failure code.

    Each code has a unique identifier (HE1001, etc.), name, category
    and a short description.
    """

    code: str
    """Unique code identifier (e.g., 'HE1001')."""

    name: str
    """Failure kind (e.g., 'invalid_argument')."""

    category: str
    """Failure category: 'input', 'state' or 'limit'."""

    description: str
    """Brief description of the failure."""


HE1001 = LibraryErrorCode(
    code="HE1001",
    name="invalid_argument",
    category="input",
    description="Malformed constructor or resolver input.",
)
HE1002 = LibraryErrorCode(
    code="HE1002",
    name="not_found",
    category="input",
    description="Missing catalog code, template key or capability feature.",
)
HE1003 = LibraryErrorCode(
    code="HE1003",
    name="already_registered",
    category="input",
    description="Capability group or catalog already registered for the type.",
)
HE2001 = LibraryErrorCode(
    code="HE2001",
    name="invalid_state",
    category="state",
    description="Reserved-name collision or catalog not configured before use.",
)
HE3001 = LibraryErrorCode(
    code="HE3001",
    name="resource_exhausted",
    category="limit",
    description="Template substitution exceeded the replacement cap.",
)
HE9999 = LibraryErrorCode(
    code="HE9999",
    name="unknown",
    category="unknown",
    description="Unclassified library failure.",
)

LIBRARY_ERROR_CODES: dict[str, LibraryErrorCode] = {
    HE1001.code: HE1001,
    HE1002.code: HE1002,
    HE1003.code: HE1003,
    HE2001.code: HE2001,
    HE3001.code: HE3001,
    HE9999.code: HE9999,
}

_NAME_TO_CODE: dict[str, LibraryErrorCode] = {
    lec.name: lec for lec in LIBRARY_ERROR_CODES.values()
}


def from_name(name: str) -> LibraryErrorCode:
    """Get the LibraryErrorCode for a failure kind.

    Unknown kinds map to HE9999 rather than raising, so this is safe to call
    from inside exception handling.

    Args:
        name: Failure kind (e.g., 'not_found').

    Returns:
        The LibraryErrorCode instance.
    """
    return _NAME_TO_CODE.get(name, HE9999)
