"""Failure records consumed by the renderer.

Provide the canonical ``FailureRecord`` together with the two dead end
shapes parsers produce natively and the adapters converting them.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any

from deadends.log import get_logger
from deadends.report.errors import InvalidPositionError

logger = get_logger(__name__)


def _check_position(row: int, col: int, what: str) -> None:
    if row < 1 or col < 1:
        raise InvalidPositionError(row, col, what=what)


@dataclass(frozen=True)
class ContextFrame:
    """A named parsing context active when a failure occurred."""

    row: int
    """Line where the context started (1-indexed)."""

    col: int
    """Column where the context started (1-indexed)."""

    label: str
    """Human-readable context name, e.g. "list" or "function call"."""

    def __post_init__(self) -> None:
        """Reject positions outside the source coordinate space."""
        _check_position(self.row, self.col, "context")

    def describe(self) -> str:
        """Render the frame as ``label (row:col)``."""
        return f"{self.label} ({self.row}:{self.col})"


@dataclass(frozen=True)
class FailureRecord:
    """A parser failure at a known source position.

    The context stack is innermost-first: the most recently entered
    context comes first.
    """

    row: int
    """Line of the failure (1-indexed)."""

    col: int
    """Column of the failure (1-indexed)."""

    problem: Any
    """Problem value, interpreted only by the classifier."""

    context_stack: tuple[ContextFrame, ...] = ()
    """Contexts active at the failure, innermost first."""

    def __post_init__(self) -> None:
        """Reject positions outside the source coordinate space."""
        _check_position(self.row, self.col, "failure")
        if not isinstance(self.context_stack, tuple):
            object.__setattr__(self, "context_stack", tuple(self.context_stack))

    @property
    def position(self) -> tuple[int, int]:
        """The ``(row, col)`` pair identifying the failure location."""
        return self.row, self.col


@dataclass(frozen=True)
class DeadEnd:
    """Failure reported by a parser that does not track contexts."""

    row: int
    col: int
    problem: Any


@dataclass(frozen=True)
class ContextDeadEnd:
    """Failure reported by a parser that tracks named contexts.

    Frames may be any object with ``row`` and ``col`` attributes and a
    ``context`` or ``label`` attribute naming the context.
    """

    row: int
    col: int
    problem: Any
    context_stack: Sequence[Any] = field(default_factory=tuple)


def from_dead_end(dead_end: DeadEnd) -> FailureRecord:
    """Convert a context-free dead end into a failure record.

    Args:
        dead_end: The dead end to convert.

    Returns:
        Failure record with an empty context stack.

    """
    return FailureRecord(row=dead_end.row, col=dead_end.col, problem=dead_end.problem)


def _to_frame(frame: Any) -> ContextFrame:
    if isinstance(frame, ContextFrame):
        return frame
    label = getattr(frame, "label", None)
    if label is None:
        label = frame.context
    return ContextFrame(row=frame.row, col=frame.col, label=str(label))


def from_context_dead_end(dead_end: ContextDeadEnd) -> FailureRecord:
    """Convert a dead end carrying a context stack into a failure record.

    Args:
        dead_end: The dead end to convert. Its stack must be innermost-first.

    Returns:
        Failure record with the converted context stack.

    """
    return FailureRecord(
        row=dead_end.row,
        col=dead_end.col,
        problem=dead_end.problem,
        context_stack=tuple(_to_frame(frame) for frame in dead_end.context_stack),
    )


def from_dead_ends(
    dead_ends: Iterable[DeadEnd | ContextDeadEnd | FailureRecord],
) -> list[FailureRecord]:
    """Convert a mix of dead end shapes into failure records.

    Args:
        dead_ends: Dead ends of either shape, or ready-made records.

    Returns:
        Failure records in input order.

    Raises:
        TypeError: If an item is none of the supported shapes.

    """
    records: list[FailureRecord] = []
    for item in dead_ends:
        if isinstance(item, FailureRecord):
            records.append(item)
        elif isinstance(item, ContextDeadEnd):
            records.append(from_context_dead_end(item))
        elif isinstance(item, DeadEnd):
            records.append(from_dead_end(item))
        else:
            msg = f"Unsupported dead end type: {type(item).__name__}"
            raise TypeError(msg)
    logger.debug("Converted %d dead ends into failure records", len(records))
    return records
