"""HTML output for dead end reports.

Fragments are escaped HTML strings. The assembled report is a ``<pre>``
block, so line breaks and column alignment survive as-is.
"""

import html
from collections.abc import Sequence

from deadends.report.records import FailureRecord
from deadends.report.renderer import (
    DEFAULT_EXTRACT,
    ExtractStrategy,
    RenderConfig,
    render,
)

CSS_PREFIX = "deadends"
"""Prefix of the CSS classes in the generated markup."""


def _span(css_class: str, fragment: str) -> str:
    return f'<span class="{CSS_PREFIX}-{css_class}">{fragment}</span>'


def _caret(fragment: str) -> str:
    return _span("caret", fragment)


def _context(fragment: str) -> str:
    return _span("context", fragment)


def _text(raw: str) -> str:
    return html.escape(raw, quote=False)


def config(lines_of_extra_context: int = 0) -> RenderConfig[str]:
    """Build a configuration producing escaped HTML fragments."""
    return RenderConfig(
        text=_text,
        format_caret=_caret,
        format_context=_context,
        newline="\n",
        lines_of_extra_context=lines_of_extra_context,
    )


def render_html(
    source_text: str,
    failures: Sequence[FailureRecord],
    *,
    lines_of_extra_context: int = 0,
    extract: ExtractStrategy = DEFAULT_EXTRACT,
) -> str:
    """Render a dead end report as an HTML ``<pre>`` element.

    Args:
        source_text: Source the failures refer to.
        failures: Failure records to report.
        lines_of_extra_context: Source lines shown around each failure.
        extract: Context stack accessor and problem classifier.

    Returns:
        HTML markup, empty when there are no failures.

    """
    fragments = render(
        config(lines_of_extra_context),
        extract,
        source_text,
        failures,
    )
    if not fragments:
        return ""
    return f'<pre class="{CSS_PREFIX}">{"".join(fragments)}</pre>'
