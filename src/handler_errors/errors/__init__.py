"""错误体系：库自身抛出的结构化失败类型。

Failure hierarchy for handler-errors.

Provides the structured exceptions raised by the library itself.
"""

from handler_errors.errors.base import (
    AlreadyRegisteredError,
    ErrorContext,
    FeatureNotRegisteredError,
    HandlerErrorsError,
    InvalidArgumentError,
    InvalidStateError,
    NotFoundError,
    ResourceExhaustedError,
)
from handler_errors.errors.codes import (
    LIBRARY_ERROR_CODES,
    LibraryErrorCode,
    from_name,
)

__all__ = [
    "AlreadyRegisteredError",
    "ErrorContext",
    "FeatureNotRegisteredError",
    "HandlerErrorsError",
    "InvalidArgumentError",
    "InvalidStateError",
    "LIBRARY_ERROR_CODES",
    "LibraryErrorCode",
    "NotFoundError",
    "ResourceExhaustedError",
    "from_name",
]
