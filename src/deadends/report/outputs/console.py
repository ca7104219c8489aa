"""Rich console output for dead end reports."""

from collections.abc import Callable, Sequence
from dataclasses import dataclass

from rich.console import Console
from rich.text import Text

from deadends.report.records import FailureRecord
from deadends.report.renderer import (
    DEFAULT_EXTRACT,
    ExtractStrategy,
    RenderConfig,
    render,
)


@dataclass(frozen=True)
class ConsoleStyles:
    """Rich styles applied to decorated fragments."""

    caret: str = "bold red"
    """Style of the caret under the failing column."""

    context: str = "bold cyan"
    """Style of the context stack in sub-report headers."""


DEFAULT_STYLES = ConsoleStyles()


def config(
    lines_of_extra_context: int = 0,
    styles: ConsoleStyles = DEFAULT_STYLES,
) -> RenderConfig[Text]:
    """Build a configuration producing rich ``Text`` fragments.

    Args:
        lines_of_extra_context: Source lines shown around each failure.
        styles: Styles for the caret and the context stack.

    Returns:
        Render configuration for rich text.

    """

    def styled(style: str) -> Callable[[Text], Text]:
        def apply(fragment: Text) -> Text:
            decorated = fragment.copy()
            decorated.stylize(style)
            return decorated

        return apply

    return RenderConfig(
        text=Text,
        format_caret=styled(styles.caret),
        format_context=styled(styles.context),
        newline=Text("\n"),
        lines_of_extra_context=lines_of_extra_context,
    )


def render_console(
    source_text: str,
    failures: Sequence[FailureRecord],
    *,
    lines_of_extra_context: int = 0,
    extract: ExtractStrategy = DEFAULT_EXTRACT,
    styles: ConsoleStyles = DEFAULT_STYLES,
) -> Text:
    """Render a dead end report as rich text.

    Args:
        source_text: Source the failures refer to.
        failures: Failure records to report.
        lines_of_extra_context: Source lines shown around each failure.
        extract: Context stack accessor and problem classifier.
        styles: Styles for the caret and the context stack.

    Returns:
        The assembled report.

    """
    fragments = render(
        config(lines_of_extra_context, styles),
        extract,
        source_text,
        failures,
    )
    return Text.assemble(*fragments)


def print_report(
    console: Console,
    source_text: str,
    failures: Sequence[FailureRecord],
    *,
    lines_of_extra_context: int = 0,
    extract: ExtractStrategy = DEFAULT_EXTRACT,
    styles: ConsoleStyles = DEFAULT_STYLES,
) -> None:
    """Print a dead end report to a rich console."""
    report = render_console(
        source_text,
        failures,
        lines_of_extra_context=lines_of_extra_context,
        extract=extract,
        styles=styles,
    )
    console.print(report, end="", soft_wrap=True, highlight=False)
