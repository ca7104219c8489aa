"""Tests for failure records and the dead end adapters."""

from dataclasses import dataclass

import pytest

from deadends.report.errors import DeadEndError, InvalidPositionError
from deadends.report.problems import ExpectingInt, Problem
from deadends.report.records import (
    ContextDeadEnd,
    ContextFrame,
    DeadEnd,
    FailureRecord,
    from_context_dead_end,
    from_dead_end,
    from_dead_ends,
)


@dataclass
class NativeFrame:
    """Context frame shaped like a parser's own type."""

    row: int
    col: int
    context: str


class TestFailureRecord:
    """Test FailureRecord construction."""

    def test_position(self) -> None:
        """Position is the (row, col) pair."""
        record = FailureRecord(row=3, col=7, problem=ExpectingInt())
        assert record.position == (3, 7)

    def test_context_stack_defaults_to_empty(self) -> None:
        """Records without contexts have an empty stack."""
        assert FailureRecord(row=1, col=1, problem=None).context_stack == ()

    def test_context_stack_is_frozen_as_tuple(self) -> None:
        """Lists passed as stacks are stored as tuples."""
        frame = ContextFrame(row=1, col=1, label="list")
        record = FailureRecord(row=1, col=2, problem=None, context_stack=[frame])
        assert record.context_stack == (frame,)

    @pytest.mark.parametrize(("row", "col"), [(0, 1), (1, 0), (-1, 5)])
    def test_invalid_position_is_rejected(self, row: int, col: int) -> None:
        """Rows and columns start at 1."""
        with pytest.raises(InvalidPositionError) as excinfo:
            FailureRecord(row=row, col=col, problem=None)
        assert excinfo.value.row == row
        assert excinfo.value.col == col

    def test_invalid_position_error_hierarchy(self) -> None:
        """InvalidPositionError is both a DeadEndError and a ValueError."""
        error = InvalidPositionError(0, 0)
        assert isinstance(error, DeadEndError)
        assert isinstance(error, ValueError)
        assert "0:0" in str(error)


class TestContextFrame:
    """Test ContextFrame."""

    def test_describe(self) -> None:
        """Frames describe themselves with their position."""
        assert ContextFrame(row=2, col=4, label="call").describe() == "call (2:4)"

    def test_invalid_position_is_rejected(self) -> None:
        """Context positions are validated too."""
        with pytest.raises(InvalidPositionError, match="context"):
            ContextFrame(row=0, col=1, label="call")


class TestAdapters:
    """Test conversion of native dead ends."""

    def test_from_dead_end(self) -> None:
        """Context-free dead ends get an empty stack."""
        record = from_dead_end(DeadEnd(row=2, col=3, problem=Problem("boom")))
        assert record == FailureRecord(row=2, col=3, problem=Problem("boom"))

    def test_from_context_dead_end_keeps_stack_order(self) -> None:
        """Native frames are converted in order."""
        dead_end = ContextDeadEnd(
            row=1,
            col=9,
            problem=ExpectingInt(),
            context_stack=[NativeFrame(1, 5, "item"), NativeFrame(1, 1, "list")],
        )
        record = from_context_dead_end(dead_end)
        assert record.context_stack == (
            ContextFrame(row=1, col=5, label="item"),
            ContextFrame(row=1, col=1, label="list"),
        )

    def test_from_context_dead_end_accepts_context_frames(self) -> None:
        """Frames that already are ContextFrames pass through."""
        frame = ContextFrame(row=1, col=1, label="list")
        record = from_context_dead_end(
            ContextDeadEnd(row=1, col=2, problem=None, context_stack=(frame,)),
        )
        assert record.context_stack == (frame,)

    def test_from_dead_ends_mixed(self) -> None:
        """Mixed shapes convert in input order."""
        ready = FailureRecord(row=5, col=5, problem=None)
        records = from_dead_ends(
            [
                DeadEnd(row=1, col=1, problem=None),
                ContextDeadEnd(
                    row=2,
                    col=2,
                    problem=None,
                    context_stack=[NativeFrame(2, 1, "x")],
                ),
                ready,
            ],
        )
        assert [record.position for record in records] == [(1, 1), (2, 2), (5, 5)]
        assert records[1].context_stack[0].label == "x"
        assert records[2] is ready

    def test_from_dead_ends_rejects_unknown_shapes(self) -> None:
        """Unsupported items raise TypeError."""
        with pytest.raises(TypeError, match="Unsupported dead end type"):
            from_dead_ends([object()])
