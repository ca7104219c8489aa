"""Dead end report renderer.

Turn a flat list of failure records into an ordered sequence of output
fragments: source context with carets, followed by deduplicated and
sorted descriptions of what went wrong at each position.

The renderer never inspects the fragments it produces. Output adapters
supply a ``RenderConfig`` with four constructors and assemble the
returned sequence into their own format.

Example plain text output for ``lines_of_extra_context=1``::

    1| let x = [1, 2
    2| in x
       ^

      Expecting one of ",", "]"

"""

import re
from collections.abc import Callable, Hashable, Iterable, Sequence
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from deadends.log import get_logger
from deadends.report.problems import Expected, ProblemClassification, classify_problem
from deadends.report.records import ContextFrame, FailureRecord

logger = get_logger(__name__)

Out = TypeVar("Out")
T = TypeVar("T")
K = TypeVar("K", bound=Hashable)

_LINE_BREAK = re.compile(r"\r\n|\r|\n")

CARET = "^"
"""Mark placed under the failing column."""

CONTEXT_SEPARATOR = " > "
"""Separator between context frames in a sub-report header."""

INDENT = "  "
"""Indentation of problem description lines."""


@dataclass(frozen=True)
class RenderConfig(Generic[Out]):
    """Output constructors and layout options for a single render call."""

    text: Callable[[str], Out]
    """Build a fragment from plain text."""

    format_caret: Callable[[Out], Out]
    """Decorate the caret mark."""

    format_context: Callable[[Out], Out]
    """Decorate the context stack in sub-report headers."""

    newline: Out
    """Fragment ending a line."""

    lines_of_extra_context: int = 0
    """Source lines shown before and after each failing line."""

    def __post_init__(self) -> None:
        """Validate layout options."""
        if self.lines_of_extra_context < 0:
            msg = (
                "lines_of_extra_context must be non-negative, "
                f"got {self.lines_of_extra_context}"
            )
            raise ValueError(msg)


def _own_context_stack(record: FailureRecord) -> Sequence[ContextFrame]:
    return record.context_stack


@dataclass(frozen=True)
class ExtractStrategy:
    """How to read contexts and classify problems of failure records."""

    context_stack: Callable[[FailureRecord], Sequence[ContextFrame]] = (
        _own_context_stack
    )
    """Return the innermost-first context stack of a record."""

    classify: Callable[[Any], ProblemClassification] = classify_problem
    """Classify a record's problem."""


DEFAULT_EXTRACT = ExtractStrategy()
"""Use the record's own context stack and the built-in classifier."""


@dataclass(frozen=True)
class SourceLine:
    """A numbered line of source text."""

    number: int
    """Line number (1-indexed)."""

    text: str
    """Line content without the line break."""


def split_lines(source_text: str) -> list[SourceLine]:
    """Split source text into numbered lines.

    Args:
        source_text: Full source text.

    Returns:
        Lines numbered from 1. Empty text yields one empty line.

    """
    return [
        SourceLine(number, text)
        for number, text in enumerate(_LINE_BREAK.split(source_text), start=1)
    ]


def group_stable(items: Iterable[T], key: Callable[[T], K]) -> list[tuple[K, list[T]]]:
    """Group items by key, keeping first-occurrence order of the groups.

    Args:
        items: Items to group.
        key: Function computing the grouping key.

    Returns:
        ``(key, members)`` pairs. Members keep their input order.

    """
    groups: dict[K, list[T]] = {}
    for item in items:
        groups.setdefault(key(item), []).append(item)
    return list(groups.items())


def render(
    config: RenderConfig[Out],
    extract: ExtractStrategy,
    source_text: str,
    failures: Sequence[FailureRecord],
) -> list[Out]:
    """Render failure records into output fragments.

    Args:
        config: Output constructors and layout options.
        extract: Context stack accessor and problem classifier.
        source_text: Source the failures refer to.
        failures: Failure records, in the order the parser reported them.

    Returns:
        Fragments to concatenate, empty when there are no failures.

    """
    if not failures:
        return []

    lines = split_lines(source_text)
    by_position = group_stable(failures, lambda record: record.position)
    logger.debug(
        "Rendering %d failures at %d positions",
        len(failures),
        len(by_position),
    )

    output: list[Out] = []
    for index, ((row, col), group) in enumerate(by_position):
        if index > 0:
            output.append(config.newline)
        output.extend(_source_context(config, lines, row, col))
        output.append(config.newline)
        by_context = group_stable(
            group,
            lambda record: tuple(extract.context_stack(record)),
        )
        for context_stack, members in by_context:
            output.extend(_sub_report(config, extract, context_stack, members))
    return output


def describe_problems(
    classifications: Iterable[ProblemClassification],
) -> list[str]:
    """Phrase classified problems as sorted, deduplicated lines.

    Args:
        classifications: Classified problems of one sub-report.

    Returns:
        Description lines in alphabetical order.

    """
    expected: set[str] = set()
    others: set[str] = set()
    for classification in classifications:
        if isinstance(classification, Expected):
            expected.add(classification.text)
        else:
            others.add(classification.text)

    descriptions = list(others)
    if len(expected) == 1:
        descriptions.append(f"Expecting {next(iter(expected))}")
    elif expected:
        descriptions.append(f"Expecting one of {', '.join(sorted(expected))}")
    return sorted(descriptions)


def describe_context(context_stack: Sequence[ContextFrame]) -> str:
    """Render an innermost-first context stack outermost first.

    Args:
        context_stack: Frames, innermost first.

    Returns:
        Frames joined with ``" > "``, e.g. ``list (1:1) > item (1:5)``.

    """
    return CONTEXT_SEPARATOR.join(frame.describe() for frame in reversed(context_stack))


def _sub_report(
    config: RenderConfig[Out],
    extract: ExtractStrategy,
    context_stack: Sequence[ContextFrame],
    members: list[FailureRecord],
) -> list[Out]:
    output: list[Out] = []
    if context_stack:
        output.extend(
            [
                config.text("- "),
                config.format_context(config.text(describe_context(context_stack))),
                config.text(":"),
                config.newline,
            ],
        )
    descriptions = describe_problems(
        extract.classify(record.problem) for record in members
    )
    for description in descriptions:
        output.extend([config.text(f"{INDENT}{description}"), config.newline])
    return output


def _source_context(
    config: RenderConfig[Out],
    lines: list[SourceLine],
    row: int,
    col: int,
) -> list[Out]:
    extra = config.lines_of_extra_context
    # lines[n - 1] holds line number n
    before = lines[max(0, row - 1 - extra) : max(0, row - 1)]
    after = lines[row : row + extra]
    exact = lines[row - 1] if row <= len(lines) else SourceLine(row, "")

    num_length = len(str(after[-1].number if after else row))

    def numbered(line: SourceLine) -> list[Out]:
        return [
            config.text(f"{line.number:>{num_length}}| {line.text}"),
            config.newline,
        ]

    output: list[Out] = []
    for line in before:
        output.extend(numbered(line))
    output.extend(numbered(exact))
    output.extend(
        [
            config.text(" " * (num_length + col + 1)),
            config.format_caret(config.text(CARET)),
            config.newline,
        ],
    )
    for line in after:
        output.extend(numbered(line))
    return output
