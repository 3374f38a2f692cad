"""Tests for error loggers and the structured logging layer."""

import io
import json
import logging

import pytest

from handler_errors.core import HandlerError
from handler_errors.errors import InvalidArgumentError
from handler_errors.formatters import JsonFormatter, TextFormatter
from handler_errors.loggers import (
    BoundLogger,
    ConsoleLogger,
    ErrorLogger,
    LogContext,
    LogLevel,
    SensitiveDataMasker,
    get_log_context,
    get_logger,
    set_log_context,
)


class RecordingLogger(ErrorLogger):
    """Logger collecting emitted text in memory."""

    def __init__(self, *args: object, **kwargs: object) -> None:
        super().__init__(*args, **kwargs)  # type: ignore[arg-type]
        self.lines: list[str] = []

    def emit(self, error: HandlerError, text: str) -> None:
        self.lines.append(text)


class TestErrorLogger:
    """Tests for threshold handling and rendering."""

    def test_threshold(self) -> None:
        """Test records below the threshold are dropped."""
        logger = RecordingLogger(min_severity="warning")
        logger.log(HandlerError.info("quiet"))
        logger.log(HandlerError.warning("loud"))
        logger.log(HandlerError.critical("louder"))
        assert logger.lines == [
            "[WARNING] HandlerError: loud",
            "[CRITICAL] HandlerError: louder",
        ]

    def test_should_log(self) -> None:
        """Test should_log compares weights."""
        logger = RecordingLogger(min_severity="error")
        assert logger.should_log(HandlerError.critical("x"))
        assert logger.should_log(HandlerError("x"))
        assert not logger.should_log(HandlerError.debug("x"))

    def test_invalid_threshold(self) -> None:
        """Test unknown severities are rejected."""
        with pytest.raises(InvalidArgumentError):
            RecordingLogger(min_severity="fatal")

    def test_formatter_and_options(self) -> None:
        """Test the formatter is used with per-call options."""
        logger = RecordingLogger(formatter=TextFormatter(show_timestamp=False))
        logger.log(HandlerError("boom", {"a": 1}), show_metadata=False)
        assert logger.lines == ["HandlerError: boom"]

    def test_options_without_formatter(self) -> None:
        """Test options need a formatter."""
        with pytest.raises(InvalidArgumentError):
            RecordingLogger().log(HandlerError("x"), show_metadata=False)

    def test_log_chain(self) -> None:
        """Test chain logging uses the formatter's chain output."""
        logger = RecordingLogger(formatter=JsonFormatter(indent=None))
        logger.log_chain(HandlerError("outer", HandlerError("inner")))
        assert [d["message"] for d in json.loads(logger.lines[0])] == ["outer", "inner"]

    def test_log_chain_without_formatter(self) -> None:
        """Test chain logging falls back to the single-line forms."""
        logger = RecordingLogger()
        logger.log_chain(HandlerError("outer", HandlerError.debug("inner")))
        assert logger.lines == ["[ERROR] HandlerError: outer\n[DEBUG] HandlerError: inner"]

    def test_log_chain_threshold_uses_head(self) -> None:
        """Test chain logging checks the head record only."""
        logger = RecordingLogger(min_severity="error")
        logger.log_chain(HandlerError.info("outer", HandlerError.critical("inner")))
        assert logger.lines == []

    def test_rejects_non_records(self) -> None:
        """Test only records can be logged."""
        with pytest.raises(InvalidArgumentError):
            RecordingLogger().log(RuntimeError("x"))  # type: ignore[arg-type]


class TestConsoleLogger:
    """Tests for ConsoleLogger."""

    def test_writes_at_severity_level(self, log_stream: io.StringIO) -> None:
        """Test records are logged at their mapped level."""
        ConsoleLogger().log(HandlerError.warning("Low disk"))
        output = log_stream.getvalue()
        assert "WARNING" in output
        assert "[WARNING] HandlerError: Low disk" in output

    def test_threshold(self, log_stream: io.StringIO) -> None:
        """Test below-threshold records produce no output."""
        ConsoleLogger(min_severity="critical").log(HandlerError("dropped"))
        assert log_stream.getvalue() == ""

    def test_extra_fields(self, json_log_stream: io.StringIO) -> None:
        """Test structured fields travel with the log line."""
        err = HandlerError("Login failed", "AUTH001", {"user": "ana", "password": "hunter2"})
        ConsoleLogger(logger_name="handler_errors.test").log(err)
        data = json.loads(json_log_stream.getvalue())
        assert data["level"] == "ERROR"
        assert data["logger"] == "handler_errors.test"
        assert data["error_id"] == err.id
        assert data["code"] == "AUTH001"
        assert data["severity"] == "error"
        assert data["metadata"] == {"user": "ana", "password": "***REDACTED***"}

    def test_context_included(self, json_log_stream: io.StringIO) -> None:
        """Test the request-scoped context is attached."""
        set_log_context(LogContext(request_id="req-1", component="billing"))
        ConsoleLogger().log(HandlerError("x"))
        data = json.loads(json_log_stream.getvalue())
        assert data["context"] == {"request_id": "req-1", "component": "billing"}

    def test_as_feature(self, log_stream: io.StringIO) -> None:
        """Test the console logger as a capability."""
        HandlerError.register_group("log", {"console": ConsoleLogger.feature()})
        err = HandlerError("outer", HandlerError("inner"))
        assert isinstance(err.log.console, BoundLogger)
        assert isinstance(err.log.console.logger, ConsoleLogger)
        err.log.console.log_chain()
        output = log_stream.getvalue()
        assert "HandlerError: outer" in output
        assert "HandlerError: inner" in output


class TestSensitiveDataMasker:
    """Tests for SensitiveDataMasker."""

    def test_mask_bearer(self) -> None:
        """Test bearer tokens are masked."""
        masked = SensitiveDataMasker().mask("Authorization: Bearer abc.def")
        assert "abc.def" not in masked

    def test_mask_connection_string(self) -> None:
        """Test passwords in URLs are masked."""
        masked = SensitiveDataMasker().mask("postgres://admin:s3cret@db:5432/app")
        assert "s3cret" not in masked
        assert "admin" in masked

    def test_mask_dict(self) -> None:
        """Test sensitive keys and nested values."""
        masked = SensitiveDataMasker().mask_dict(
            {"api_key": "x", "nested": {"token": "y", "ok": 1}, "items": [{"secret": "z"}]}
        )
        assert masked == {
            "api_key": "***REDACTED***",
            "nested": {"token": "***REDACTED***", "ok": 1},
            "items": [{"secret": "***REDACTED***"}],
        }


class TestLogContext:
    """Tests for LogContext."""

    def test_round_trip_through_context_var(self) -> None:
        """Test set and get preserve known and extra fields."""
        set_log_context(LogContext(request_id="r1", extra={"tenant": "acme"}))
        context = get_log_context()
        assert context.request_id == "r1"
        assert context.extra == {"tenant": "acme"}

    def test_with_extra(self) -> None:
        """Test with_extra returns a new context."""
        base = LogContext(request_id="r1")
        derived = base.with_extra(attempt=2)
        assert derived.to_dict() == {"request_id": "r1", "attempt": 2}
        assert base.extra == {}

    def test_only_request_and_component_are_named_fields(self) -> None:
        """Test tracing identifiers are carried as plain extra fields."""
        set_log_context(LogContext(component="billing", extra={"trace_id": "t1"}))
        context = get_log_context()
        assert context.component == "billing"
        assert context.extra == {"trace_id": "t1"}
        assert not hasattr(context, "trace_id")


class TestStructuredLogger:
    """Tests for the structured logger wrapper."""

    def test_log_writes_through_handler(self, log_stream: io.StringIO) -> None:
        """Test numeric-level log calls write through the configured handler."""
        logger = get_logger("handler_errors.unit")
        logger.log(logging.DEBUG, "d")
        logger.log(logging.INFO, "i")
        logger.log(logging.ERROR, "e")
        output = log_stream.getvalue()
        assert "DEBUG" in output
        assert "| handler_errors.unit | e" in output
        assert logger.name == "handler_errors.unit"

    def test_log_is_the_single_entry_point(self) -> None:
        """Test the wrapper exposes no per-level helpers beside log."""
        logger = get_logger("handler_errors.unit")
        for helper in ("debug", "info", "warning", "error", "critical"):
            assert not hasattr(logger, helper)

    def test_log_level_mapping(self) -> None:
        """Test LogLevel conversion."""
        assert LogLevel.WARNING.to_logging_level() == 30
