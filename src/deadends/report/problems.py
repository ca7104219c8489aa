"""Parser problem tags and their classification.

Provide the closed set of problems a parser reports at a dead end, the
``Expected``/``Other`` classification used to phrase and deduplicate them,
and the default classifier mapping one to the other.
"""

import json
from dataclasses import dataclass

from deadends.log import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class Expecting:
    """A specific piece of text was expected."""

    text: str


@dataclass(frozen=True)
class ExpectingInt:
    """An integer was expected."""


@dataclass(frozen=True)
class ExpectingHex:
    """A hexadecimal number was expected."""


@dataclass(frozen=True)
class ExpectingOctal:
    """An octal number was expected."""


@dataclass(frozen=True)
class ExpectingBinary:
    """A binary number was expected."""


@dataclass(frozen=True)
class ExpectingFloat:
    """A floating point number was expected."""


@dataclass(frozen=True)
class ExpectingNumber:
    """Any number was expected."""


@dataclass(frozen=True)
class ExpectingVariable:
    """A variable name was expected."""


@dataclass(frozen=True)
class ExpectingSymbol:
    """A symbol such as ``(`` or ``->`` was expected."""

    symbol: str


@dataclass(frozen=True)
class ExpectingKeyword:
    """A keyword such as ``let`` was expected."""

    keyword: str


@dataclass(frozen=True)
class ExpectingEnd:
    """The end of input was expected."""


@dataclass(frozen=True)
class UnexpectedChar:
    """A character that no rule accepts was found."""


@dataclass(frozen=True)
class Problem:
    """A custom problem reported by the parser."""

    message: str


@dataclass(frozen=True)
class BadRepeat:
    """A repeating parser made no progress."""


ParserProblem = (
    Expecting
    | ExpectingInt
    | ExpectingHex
    | ExpectingOctal
    | ExpectingBinary
    | ExpectingFloat
    | ExpectingNumber
    | ExpectingVariable
    | ExpectingSymbol
    | ExpectingKeyword
    | ExpectingEnd
    | UnexpectedChar
    | Problem
    | BadRepeat
)
"""Every problem the default classifier understands."""


@dataclass(frozen=True)
class Expected:
    """Classification of a problem describing something missing."""

    text: str
    """What was expected, phrased to follow the word "Expecting"."""


@dataclass(frozen=True)
class Other:
    """Classification of a free-form problem."""

    text: str
    """Full description of the problem."""


ProblemClassification = Expected | Other
"""Result of classifying a problem."""


def escape(text: str) -> str:
    """Render text as a double-quoted string literal.

    Args:
        text: Raw text.

    Returns:
        JSON string literal for the text.

    """
    return json.dumps(text, ensure_ascii=False)


_FIXED_EXPECTATIONS: dict[type, str] = {
    ExpectingVariable: "a variable",
    ExpectingEnd: "the end",
    ExpectingInt: "an integer",
    ExpectingHex: "an hexadecimal number",
    ExpectingOctal: "an octal number",
    ExpectingBinary: "a binary number",
    ExpectingFloat: "a floating point number",
    ExpectingNumber: "a number",
}


def classify_problem(problem: object) -> ProblemClassification:
    """Classify a parser problem for reporting.

    Args:
        problem: One of the problems in ``ParserProblem``.

    Returns:
        ``Expected`` for problems naming a missing construct, ``Other``
        for everything else.

    Raises:
        TypeError: If the problem is not a known parser problem.

    """
    fixed = _FIXED_EXPECTATIONS.get(type(problem))
    if fixed is not None:
        return Expected(fixed)

    match problem:
        case Expecting(text=text):
            return Expected(escape(text))
        case ExpectingSymbol(symbol=symbol):
            return Expected(escape(symbol))
        case ExpectingKeyword(keyword=keyword):
            return Expected(escape(keyword))
        case UnexpectedChar():
            return Other("Unexpected char")
        case Problem(message=message):
            return Other(message)
        case BadRepeat():
            return Other("Bad repetition")

    msg = f"Unknown parser problem: {problem!r}"
    logger.debug(msg)
    raise TypeError(msg)
