"""Markdown output for dead end reports."""

import re
from collections.abc import Sequence

from deadends.report.records import FailureRecord
from deadends.report.renderer import (
    DEFAULT_EXTRACT,
    ExtractStrategy,
    RenderConfig,
    render,
)

HARD_BREAK = "  \n"
"""Markdown line break that does not start a new paragraph."""

_SPECIAL = re.compile(r"([\\`*_{}\[\]()#+\-.!|<>])")
_SPACES = re.compile(r"^ +| {2,}")


def _text(raw: str) -> str:
    escaped = _SPECIAL.sub(r"\\\1", raw.replace("&", "&amp;"))
    # Markdown collapses leading spaces and runs of spaces
    return _SPACES.sub(lambda match: "&nbsp;" * len(match.group()), escaped)


def _caret(fragment: str) -> str:
    return f"**{fragment}**"


def _context(fragment: str) -> str:
    return f"*{fragment}*"


def config(lines_of_extra_context: int = 0) -> RenderConfig[str]:
    """Build a configuration producing Markdown fragments."""
    return RenderConfig(
        text=_text,
        format_caret=_caret,
        format_context=_context,
        newline=HARD_BREAK,
        lines_of_extra_context=lines_of_extra_context,
    )


def render_markdown(
    source_text: str,
    failures: Sequence[FailureRecord],
    *,
    lines_of_extra_context: int = 0,
    extract: ExtractStrategy = DEFAULT_EXTRACT,
) -> str:
    """Render a dead end report as Markdown.

    Args:
        source_text: Source the failures refer to.
        failures: Failure records to report.
        lines_of_extra_context: Source lines shown around each failure.
        extract: Context stack accessor and problem classifier.

    Returns:
        Markdown text, empty when there are no failures.

    """
    return "".join(
        render(config(lines_of_extra_context), extract, source_text, failures),
    )
