"""
Console error logger.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from handler_errors.core.severity import Severity
from handler_errors.loggers.base import ErrorLogger
from handler_errors.loggers.structured import SensitiveDataMasker, get_logger

if TYPE_CHECKING:
    from handler_errors.core.record import HandlerError
    from handler_errors.formatters.base import ErrorFormatter

DEFAULT_LOGGER_NAME = "handler_errors.console"


class ConsoleLogger(ErrorLogger):
    """Logger writing records to the console through the structured logger.

    Each record is logged at the level matching its severity. The record's
    id, severity, code and masked metadata travel as extra fields.

    Example:
        >>> logger = ConsoleLogger(min_severity="warning", formatter=TextFormatter())
        >>> logger.log(HandlerError.info("ignored"))
        >>> logger.log(HandlerError.critical("Disk full", "DSK001"))
    """

    def __init__(
        self,
        min_severity: Severity | str = Severity.DEBUG,
        formatter: ErrorFormatter | None = None,
        logger_name: str = DEFAULT_LOGGER_NAME,
        masker: SensitiveDataMasker | None = None,
    ) -> None:
        super().__init__(min_severity, formatter)
        self._logger_name = logger_name
        self._masker = masker or SensitiveDataMasker()

    @property
    def logger_name(self) -> str:
        """Get the structured logger name."""
        return self._logger_name

    def emit(self, error: HandlerError, text: str) -> None:
        fields: dict[str, Any] = {
            "error_id": error.id,
            "severity": error.severity.value,
        }
        if error.code:
            fields["code"] = error.code
        if error.metadata:
            fields["metadata"] = self._masker.mask_dict(dict(error.metadata))

        get_logger(self._logger_name).log(
            error.severity.to_logging_level(), text, **fields
        )
