"""Tests for the HandlerError record."""

import re
import uuid
from datetime import datetime, timezone

import pytest

from handler_errors.core import HandlerError, Severity, is_handler_error
from handler_errors.errors import InvalidArgumentError


class TestConstruction:
    """Tests for record construction."""

    def test_defaults(self) -> None:
        """Test a record with only a message."""
        err = HandlerError("An error occurred")
        assert err.message == "An error occurred"
        assert err.name == "HandlerError"
        assert err.severity is Severity.ERROR
        assert err.code is None
        assert err.metadata is None
        assert err.cause is None
        uuid.UUID(err.id)
        assert err.timestamp.tzinfo == timezone.utc
        assert err.timestamp <= datetime.now(timezone.utc)

    def test_is_exception(self) -> None:
        """Test records can be raised and caught."""
        with pytest.raises(HandlerError, match="boom"):
            raise HandlerError("boom")

    def test_unique_ids(self) -> None:
        """Test every record gets its own id."""
        assert HandlerError("a").id != HandlerError("a").id

    @pytest.mark.parametrize("message", ["", None, 42])
    def test_message_required(self, message: object) -> None:
        """Test a missing or non-string message is rejected."""
        with pytest.raises(InvalidArgumentError, match="message required"):
            HandlerError(message)  # type: ignore[arg-type]

    def test_positional_fields(self) -> None:
        """Test code, metadata and cause given positionally."""
        root = HandlerError("root")
        err = HandlerError("outer", "E001", {"user": "ana"}, root)
        assert err.code == "E001"
        assert err.metadata == {"user": "ana"}
        assert err.cause is root
        assert err.__cause__ is root

    def test_keyword_fields(self) -> None:
        """Test the keyword options form."""
        err = HandlerError("outer", code="E001", metadata={"a": 1}, severity="warning")
        assert err.code == "E001"
        assert err.metadata == {"a": 1}
        assert err.severity is Severity.WARNING

    def test_native_cause_wrapped(self) -> None:
        """Test a native exception cause is converted to a record."""
        native = KeyError("missing")
        err = HandlerError("outer", native)
        assert isinstance(err.cause, HandlerError)
        assert err.cause.__cause__ is native

    def test_metadata_is_copied(self) -> None:
        """Test later changes to the caller's dict do not leak in."""
        data = {"a": 1}
        err = HandlerError("x", data)
        data["a"] = 2
        assert err.metadata["a"] == 1

    def test_invalid_severity(self) -> None:
        """Test unknown severities are rejected."""
        with pytest.raises(InvalidArgumentError):
            HandlerError("x", severity="fatal")


class TestImmutability:
    """Tests for read-only fields."""

    @pytest.mark.parametrize(
        "field", ["id", "timestamp", "severity", "message", "code", "metadata", "cause"]
    )
    def test_fields_read_only(self, field: str) -> None:
        """Test record fields cannot be reassigned."""
        err = HandlerError("x")
        with pytest.raises(AttributeError, match="read-only"):
            setattr(err, field, "changed")

    def test_fields_cannot_be_deleted(self) -> None:
        """Test record fields cannot be deleted."""
        err = HandlerError("x")
        with pytest.raises(AttributeError):
            del err.message

    def test_metadata_mapping_is_read_only(self) -> None:
        """Test the metadata view rejects item assignment."""
        err = HandlerError("x", {"a": 1})
        with pytest.raises(TypeError):
            err.metadata["a"] = 2  # type: ignore[index]

    def test_unrelated_attributes_allowed(self) -> None:
        """Test non-field attributes can still be attached."""
        err = HandlerError("x")
        err.note = "extra"
        assert err.note == "extra"


class TestSeverityFactories:
    """Tests for severity shortcut constructors."""

    @pytest.mark.parametrize(
        ("factory", "severity"),
        [
            ("critical", Severity.CRITICAL),
            ("error", Severity.ERROR),
            ("warning", Severity.WARNING),
            ("info", Severity.INFO),
            ("debug", Severity.DEBUG),
        ],
    )
    def test_factories(self, factory: str, severity: Severity) -> None:
        """Test each factory sets its severity."""
        err = getattr(HandlerError, factory)("msg", "E001", {"k": "v"})
        assert err.severity is severity
        assert err.code == "E001"
        assert err.metadata == {"k": "v"}

    def test_factory_returns_subclass(self) -> None:
        """Test factories construct the class they are called on."""

        class DatabaseError(HandlerError):
            pass

        err = DatabaseError.critical("connection lost")
        assert isinstance(err, DatabaseError)
        assert err.name == "DatabaseError"


class TestSerialization:
    """Tests for serialize, to_dict and string forms."""

    def test_serialize_nests_causes(self) -> None:
        """Test the full tree form nests causes."""
        root = HandlerError.warning("root", {"a": 1})
        err = HandlerError("outer", "E001", root)
        data = err.serialize()
        assert data.message == "outer"
        assert data.code == "E001"
        assert data.cause is not None
        assert data.cause.message == "root"
        assert data.cause.severity == "warning"
        assert data.cause.metadata == {"a": 1}
        assert data.cause.cause is None

    def test_timestamp_format(self) -> None:
        """Test timestamps serialize as ISO-8601 UTC with milliseconds."""
        stamp = HandlerError("x").serialize().timestamp
        assert re.fullmatch(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z", stamp)

    def test_to_dict_drops_empty_fields(self) -> None:
        """Test to_dict omits fields that are not set."""
        data = HandlerError("x").to_dict()
        assert set(data) == {"id", "message", "name", "severity", "timestamp"}

    def test_to_string(self) -> None:
        """Test the single-line form."""
        assert HandlerError("boom").to_string() == "[ERROR] HandlerError: boom"
        assert (
            HandlerError.info("ok", "I001").to_string() == "[INFO I001] HandlerError: ok"
        )

    def test_str_and_repr(self) -> None:
        """Test str is the message and repr names the fields."""
        err = HandlerError("boom", "E001")
        assert str(err) == "boom"
        assert "code='E001'" in repr(err)


class TestIsHandlerError:
    """Tests for is_handler_error."""

    def test_guard(self) -> None:
        """Test the type guard."""
        assert is_handler_error(HandlerError("x"))
        assert not is_handler_error(ValueError("x"))
        assert not is_handler_error("x")


class TestSubclassNaming:
    """Tests for concrete subtype names."""

    def test_to_string_uses_subclass_name(self) -> None:
        """Test the single-line form names the constructed subtype."""

        class FooError(HandlerError):
            pass

        assert FooError.critical("boom", "X1").to_string() == "[CRITICAL X1] FooError: boom"
