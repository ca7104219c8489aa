"""Failure records from Lark parse errors.

Convert the exceptions raised by a Lark parser into failure records so
they can be rendered like any other dead end.
"""

from collections.abc import Iterable
from typing import Any

from lark import (
    Lark,
    Token,
    UnexpectedCharacters,
    UnexpectedEOF,
    UnexpectedInput,
    UnexpectedToken,
)
from lark.parsers.lalr_interactive_parser import InteractiveParser

from deadends.log import get_logger
from deadends.report.problems import (
    Expecting,
    ExpectingEnd,
    ExpectingFloat,
    ExpectingHex,
    ExpectingInt,
    ExpectingKeyword,
    ExpectingNumber,
    ExpectingSymbol,
    ExpectingVariable,
    ParserProblem,
    UnexpectedChar,
)
from deadends.report.records import FailureRecord
from deadends.report.renderer import split_lines

logger = get_logger(__name__)

END_TERMINAL = "$END"
"""Name Lark gives the end of input."""

DEFAULT_MAX_ERRORS = 10
"""Default number of errors collected from a single parse."""

_COMMON_TERMINALS: dict[str, ParserProblem] = {
    "INT": ExpectingInt(),
    "SIGNED_INT": ExpectingInt(),
    "FLOAT": ExpectingFloat(),
    "SIGNED_FLOAT": ExpectingFloat(),
    "NUMBER": ExpectingNumber(),
    "SIGNED_NUMBER": ExpectingNumber(),
    "DECIMAL": ExpectingNumber(),
    "HEXDIGIT": ExpectingHex(),
    "NAME": ExpectingVariable(),
    "CNAME": ExpectingVariable(),
}
"""Problems for terminals imported from Lark's ``common`` grammar."""


def problem_for_terminal(terminal_name: str, lark: Lark | None = None) -> ParserProblem:
    """Describe an expected Lark terminal as a parser problem.

    Args:
        terminal_name: Terminal name from a Lark exception.
        lark: Parser owning the terminal, used to look up literal patterns.

    Returns:
        The problem describing the terminal.

    """
    if terminal_name == END_TERMINAL:
        return ExpectingEnd()

    if lark is not None:
        try:
            pattern = lark.get_terminal(terminal_name).pattern
        except KeyError:
            logger.debug("Terminal %s is not defined by the grammar", terminal_name)
        else:
            if pattern.type == "str":
                literal = pattern.value
                if literal.isidentifier():
                    return ExpectingKeyword(literal)
                return ExpectingSymbol(literal)

    common = _COMMON_TERMINALS.get(terminal_name)
    if common is not None:
        return common
    return Expecting(terminal_name)


def end_position(source_text: str) -> tuple[int, int]:
    """Position just past the last character of the source.

    Args:
        source_text: Full source text.

    Returns:
        ``(row, col)`` of the end of input.

    """
    last = split_lines(source_text)[-1]
    return last.number, len(last.text) + 1


def _error_position(error: UnexpectedInput, source_text: str) -> tuple[int, int]:
    if isinstance(error, UnexpectedToken) and error.token.type == END_TERMINAL:
        return end_position(source_text)
    line = getattr(error, "line", None)
    column = getattr(error, "column", None)
    if line is None or column is None or line < 1 or column < 1:
        return end_position(source_text)
    return line, column


def _expected_terminals(error: UnexpectedInput, lark: Lark | None) -> list[str]:
    if isinstance(error, UnexpectedCharacters):
        names: Iterable[str] = error.allowed or ()
    elif isinstance(error, (UnexpectedToken, UnexpectedEOF)):
        names = error.expected or ()
    else:
        names = ()
    # Lark lists ignored terminals such as whitespace among the allowed ones
    ignored = set(lark.ignore_tokens) if lark is not None else set()
    return sorted({str(name) for name in names} - ignored)


def from_lark_error(
    error: UnexpectedInput,
    source_text: str,
    lark: Lark | None = None,
) -> list[FailureRecord]:
    """Convert a Lark parse error into failure records.

    Every expected terminal becomes a record of its own, all at the error
    position, so the renderer merges them into one "Expecting one of" line.

    Args:
        error: The exception raised by Lark.
        source_text: The text that was parsed.
        lark: Parser that raised the error, used to describe terminals.

    Returns:
        Failure records for the error, never empty.

    """
    row, col = _error_position(error, source_text)
    problems: list[ParserProblem] = []
    if isinstance(error, UnexpectedCharacters):
        problems.append(UnexpectedChar())
    problems.extend(
        problem_for_terminal(name, lark) for name in _expected_terminals(error, lark)
    )
    if not problems:
        problems.append(UnexpectedChar())
    return [FailureRecord(row=row, col=col, problem=problem) for problem in problems]


def resynchronize(interactive_parser: InteractiveParser, token: Token) -> bool:
    """Pop parser states until one accepts the token, then feed it.

    Args:
        interactive_parser: Lark interactive parser stuck on ``token``.
        token: Token the parser rejected.

    Returns:
        True if the token was fed, False if no state on the stack accepts it
        and the token has to be dropped.

    """
    state = interactive_parser.parser_state
    height = len(state.state_stack)
    # value_stack always holds one entry less than state_stack
    for depth in range(height - 1, 0, -1):
        candidate = interactive_parser.copy(deepcopy_values=False)
        del candidate.parser_state.state_stack[depth:]
        del candidate.parser_state.value_stack[depth - 1 :]
        try:
            candidate.feed_token(token)
        except UnexpectedToken:
            continue
        state.state_stack[:] = candidate.parser_state.state_stack
        state.value_stack[:] = candidate.parser_state.value_stack
        logger.debug(
            "Resumed at %s:%s after popping %d states",
            token.line,
            token.column,
            height - depth,
        )
        return True
    return False


class _ErrorCollector:
    """``on_error`` callback recording one error per stretch of bad input.

    After an error the parser skips input until it makes progress again.
    Errors raised before that are cascades of the recorded one and are
    not recorded.
    """

    def __init__(self, max_errors: int) -> None:
        """Record at most ``max_errors`` errors."""
        self.max_errors = max_errors
        self.errors: list[UnexpectedInput] = []
        self.seen: list[UnexpectedInput] = []
        self._stack: tuple[list[Any], list[Any]] | None = None

    def _stuck(self, state: Any) -> bool:
        if self._stack is None:
            return False
        states, values = self._stack
        return (
            state.state_stack == states
            and len(state.value_stack) == len(values)
            and all(a is b for a, b in zip(state.value_stack, values, strict=True))
        )

    def __call__(self, error: UnexpectedInput) -> bool:
        """Record the error unless it cascades, then recover and go on."""
        self.seen.append(error)
        interactive_parser = getattr(error, "interactive_parser", None)
        if interactive_parser is None:
            self.errors.append(error)
            return False

        state = interactive_parser.parser_state
        if self._stuck(state):
            logger.debug("Skipping cascading error at %s:%s", error.line, error.column)
        else:
            self.errors.append(error)

        if isinstance(error, UnexpectedToken):
            if error.token.type == END_TERMINAL:
                return False
            resynchronize(interactive_parser, error.token)
        self._stack = (list(state.state_stack), list(state.value_stack))
        return len(self.errors) < self.max_errors


def collect_dead_ends(
    lark: Lark,
    source_text: str,
    *,
    max_errors: int = DEFAULT_MAX_ERRORS,
) -> list[FailureRecord]:
    """Parse source text and return the failures encountered.

    LALR parsers recover after each error by dropping parser states until
    the offending token fits, or by dropping the token. Collection goes on
    until ``max_errors`` errors were recorded or the end of input was
    reached. Other parsers stop at the first error.

    Args:
        lark: Configured Lark parser.
        source_text: Text to parse.
        max_errors: Maximum number of errors to collect.

    Returns:
        Failure records, empty when the text parses.

    """
    collector = _ErrorCollector(max_errors)
    try:
        if lark.options.parser == "lalr":
            lark.parse(source_text, on_error=collector)
        else:
            lark.parse(source_text)
    except UnexpectedInput as error:
        if not any(seen is error for seen in collector.seen):
            collector.errors.append(error)

    logger.debug("Parse finished with %d errors", len(collector.errors))
    records: list[FailureRecord] = []
    for error in collector.errors:
        records.extend(from_lark_error(error, source_text, lark))
    return records
