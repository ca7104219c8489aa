"""Plain text output for dead end reports."""

from collections.abc import Sequence

from deadends.report.records import FailureRecord
from deadends.report.renderer import (
    DEFAULT_EXTRACT,
    ExtractStrategy,
    RenderConfig,
    render,
)


def _identity(fragment: str) -> str:
    return fragment


def config(lines_of_extra_context: int = 0) -> RenderConfig[str]:
    """Build a configuration producing undecorated strings."""
    return RenderConfig(
        text=str,
        format_caret=_identity,
        format_context=_identity,
        newline="\n",
        lines_of_extra_context=lines_of_extra_context,
    )


def render_plain(
    source_text: str,
    failures: Sequence[FailureRecord],
    *,
    lines_of_extra_context: int = 0,
    extract: ExtractStrategy = DEFAULT_EXTRACT,
) -> str:
    """Render a dead end report as plain text.

    Args:
        source_text: Source the failures refer to.
        failures: Failure records to report.
        lines_of_extra_context: Source lines shown around each failure.
        extract: Context stack accessor and problem classifier.

    Returns:
        The report, empty when there are no failures.

    """
    return "".join(
        render(config(lines_of_extra_context), extract, source_text, failures),
    )
