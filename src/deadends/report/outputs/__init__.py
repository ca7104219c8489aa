"""Output adapters assembling dead end reports into concrete formats."""

from deadends.report.outputs.console import ConsoleStyles, print_report, render_console
from deadends.report.outputs.html import render_html
from deadends.report.outputs.markdown import render_markdown
from deadends.report.outputs.plain import render_plain

__all__ = [
    "ConsoleStyles",
    "print_report",
    "render_console",
    "render_html",
    "render_markdown",
    "render_plain",
]
