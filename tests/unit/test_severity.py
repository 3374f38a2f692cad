"""Tests for severity levels."""

import logging

import pytest

from handler_errors.core import SEVERITY_WEIGHTS, Severity
from handler_errors.errors import InvalidArgumentError


class TestSeverity:
    """Tests for Severity."""

    def test_values(self) -> None:
        """Test string values."""
        assert [s.value for s in Severity] == ["critical", "error", "warning", "info", "debug"]

    def test_weights_are_ordered(self) -> None:
        """Test weights decrease from critical to debug."""
        weights = [s.weight for s in Severity]
        assert weights == sorted(weights, reverse=True)
        assert SEVERITY_WEIGHTS[Severity.CRITICAL] == 5
        assert SEVERITY_WEIGHTS[Severity.DEBUG] == 1

    def test_is_str(self) -> None:
        """Test severities compare equal to their string values."""
        assert Severity.WARNING == "warning"

    @pytest.mark.parametrize(
        ("severity", "level"),
        [
            (Severity.CRITICAL, logging.CRITICAL),
            (Severity.ERROR, logging.ERROR),
            (Severity.WARNING, logging.WARNING),
            (Severity.INFO, logging.INFO),
            (Severity.DEBUG, logging.DEBUG),
        ],
    )
    def test_to_logging_level(self, severity: Severity, level: int) -> None:
        """Test mapping to stdlib logging levels."""
        assert severity.to_logging_level() == level


class TestSeverityParse:
    """Tests for Severity.parse."""

    def test_parse_instance(self) -> None:
        """Test a Severity passes through."""
        assert Severity.parse(Severity.INFO) is Severity.INFO

    def test_parse_case_insensitive(self) -> None:
        """Test names are matched case-insensitively."""
        assert Severity.parse("WARNING") is Severity.WARNING
        assert Severity.parse(" debug ") is Severity.DEBUG

    def test_parse_invalid(self) -> None:
        """Test unknown names are rejected with a hint."""
        with pytest.raises(InvalidArgumentError) as exc_info:
            Severity.parse("fatal")
        assert "critical" in exc_info.value.context.hint

    def test_parse_wrong_type(self) -> None:
        """Test non-string values are rejected."""
        with pytest.raises(InvalidArgumentError):
            Severity.parse(3)
