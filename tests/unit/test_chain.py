"""Tests for cause chain traversal."""

import pytest

from handler_errors.core import (
    HandlerError,
    SerializedChainEntry,
    Severity,
    chain_to_string,
    filter_chain,
    find_in_chain,
    get_chain,
    get_root,
    map_chain,
    most_severe,
    serialize_chain,
)


class ValidationError(HandlerError):
    """Record subclass used for type lookups."""


@pytest.fixture
def three_level() -> HandlerError:
    """Outer -> middle -> root chain with mixed severities."""
    root = HandlerError.warning("root", "R001")
    middle = ValidationError.critical("middle", root)
    return HandlerError.info("outer", middle)


def make_cycle() -> tuple[HandlerError, HandlerError]:
    """Build a -> b -> a by bypassing the read-only guard."""
    b = HandlerError("b")
    a = HandlerError("a", b)
    object.__setattr__(b, "cause", a)
    return a, b


class TestGetChain:
    """Tests for get_chain and get_root."""

    def test_single(self) -> None:
        """Test a record without cause is its own chain and root."""
        err = HandlerError("alone")
        assert get_chain(err) == [err]
        assert get_root(err) is err

    def test_order(self, three_level: HandlerError) -> None:
        """Test chain runs from newest to oldest."""
        assert [e.message for e in get_chain(three_level)] == ["outer", "middle", "root"]
        assert get_root(three_level).message == "root"

    def test_cycle_terminates(self) -> None:
        """Test a cyclic chain visits each record once."""
        a, b = make_cycle()
        chain = get_chain(a)
        assert chain == [a, b]
        assert get_root(a) is b

    def test_cycle_serialize_terminates(self) -> None:
        """Test serializing a cyclic chain stops at the repeat."""
        a, _ = make_cycle()
        data = a.serialize()
        assert data.cause is not None
        assert data.cause.cause is None


class TestChainOperations:
    """Tests for mapping, filtering and aggregation."""

    def test_map_chain(self, three_level: HandlerError) -> None:
        """Test the mapper receives the record and its index."""
        result = map_chain(three_level, lambda e, i: f"{i}:{e.message}")
        assert result == ["0:outer", "1:middle", "2:root"]

    def test_most_severe(self, three_level: HandlerError) -> None:
        """Test the highest weight wins."""
        assert most_severe(three_level).message == "middle"

    def test_most_severe_tie_keeps_first(self) -> None:
        """Test ties resolve to the earliest record."""
        root = HandlerError("root")
        outer = HandlerError("outer", root)
        assert most_severe(outer) is outer

    def test_filter_chain(self, three_level: HandlerError) -> None:
        """Test filtering by minimum severity."""
        assert [e.message for e in filter_chain(three_level, Severity.WARNING)] == [
            "middle",
            "root",
        ]
        assert len(filter_chain(three_level, "debug")) == 3

    def test_find_in_chain(self, three_level: HandlerError) -> None:
        """Test finding the first record of a type."""
        found = find_in_chain(three_level, ValidationError)
        assert isinstance(found, ValidationError)
        assert find_in_chain(HandlerError("x"), ValidationError) is None

    def test_serialize_chain(self, three_level: HandlerError) -> None:
        """Test the flat serialized form has no nested causes."""
        entries = serialize_chain(three_level)
        assert len(entries) == 3
        assert all(isinstance(e, SerializedChainEntry) for e in entries)
        assert entries[1].name == "ValidationError"
        assert entries[2].code == "R001"
        assert "cause" not in entries[0].to_dict()

    def test_chain_to_string(self, three_level: HandlerError) -> None:
        """Test the newline-joined form."""
        assert chain_to_string(three_level).splitlines() == [
            "[INFO] HandlerError: outer",
            "[CRITICAL] ValidationError: middle",
            "[WARNING R001] HandlerError: root",
        ]


class TestErrorChainView:
    """Tests for the chain view bound to a record."""

    def test_view_methods(self, three_level: HandlerError) -> None:
        """Test the view delegates to the chain functions."""
        chain = three_level.chain
        assert len(chain) == 3
        assert [e.message for e in chain] == ["outer", "middle", "root"]
        assert chain.get()[0] is three_level
        assert chain.root().message == "root"
        assert chain.most_severe().message == "middle"
        assert chain.find(ValidationError) is chain.get()[1]
        assert len(chain.filter("critical")) == 1
        assert chain.map(lambda e, i: i) == [0, 1, 2]
        assert len(chain.serialize()) == 3
        assert str(chain) == chain.to_string()


class TestChainProperties:
    """Tests for chain guarantees over arbitrary shapes."""

    def test_three_cycle_from_any_start(self) -> None:
        """Test a 3-cycle yields three distinct records from every entry point."""
        c = HandlerError("c")
        b = HandlerError("b", c)
        a = HandlerError("a", b)
        object.__setattr__(c, "cause", a)
        for start in (a, b, c):
            chain = get_chain(start)
            assert len(chain) == 3
            assert chain[0] is start
            assert get_root(start) is chain[-1]

    @pytest.mark.parametrize(
        "order",
        [
            ["debug", "info", "warning", "error", "critical"],
            ["critical", "debug", "error", "info", "warning"],
            ["info", "warning", "critical", "debug", "error"],
        ],
    )
    def test_most_severe_any_order(self, order: list[str]) -> None:
        """Test the critical record wins regardless of position."""
        error = HandlerError(order[-1], severity=order[-1])
        for severity in reversed(order[:-1]):
            error = HandlerError(severity, error, severity=severity)
        assert most_severe(error).severity is Severity.CRITICAL

    def test_serialize_cause_presence_matches(self) -> None:
        """Test serialized causes mirror record causes at every level."""
        err = HandlerError("a", HandlerError("b", HandlerError("c")))
        node, data = err, err.serialize()
        while node is not None:
            assert data.message == node.message
            assert (data.cause is None) == (node.cause is None)
            node, data = node.cause, data.cause
