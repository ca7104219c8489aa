"""Parse and organize app args."""

from collections.abc import Callable
from pathlib import Path

import typed_argparse as tap


class Args(tap.TypedArgs):
    """App args."""

    grammar: Path | None = tap.arg(
        positional=True,
        nargs="?",
        help="Lark grammar file",
        default=None,
    )
    source: Path | None = tap.arg(
        positional=True,
        nargs="?",
        help="File to parse",
        default=None,
    )
    start: str = tap.arg(help="Start rule of the grammar", default="start")
    parser: str | None = tap.arg(
        help="Lark parser algorithm, 'lalr' or 'earley' (default: lalr)",
        default=None,
    )
    context_lines: int | None = tap.arg(
        help="Source lines to show before and after each failure (default: 2)",
        default=None,
    )
    format: str | None = tap.arg(
        help="Report format: console, plain, html or markdown (default: console)",
        default=None,
    )
    max_errors: int | None = tap.arg(
        help="Maximum number of errors to collect with the lalr parser (default: 10)",
        default=None,
    )
    log_file: str | None = tap.arg(
        help="File receiving the application log (default: deadends.log)",
        default=None,
    )
    verbose: bool = tap.arg(help="Enables verbose (DEBUG) logging", default=False)
    version: bool = tap.arg(help="Show version and exit", default=False)

    @property
    def working_dir(self) -> Path:
        """Get working directory."""
        return Path.cwd().resolve()


def bind_and_run(app_main: Callable[[Args], None]) -> None:
    """Parse args and run the app passing the parsed args."""
    tap.Parser(Args).bind(app_main).run()
