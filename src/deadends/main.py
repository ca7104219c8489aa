"""deadends CLI entry point.

Parse a file with a Lark grammar and print a report of every dead end
the parser ran into.
"""

import sys
from collections.abc import Sequence
from pathlib import Path

from lark import Lark
from lark.exceptions import LarkError
from rich.console import Console

from deadends.args import Args, bind_and_run
from deadends.config_loader import Settings, load_settings
from deadends.log import get_logger, init_logging
from deadends.report.lark_adapter import collect_dead_ends
from deadends.report.outputs import (
    print_report,
    render_html,
    render_markdown,
    render_plain,
)
from deadends.report.records import FailureRecord
from deadends.version import show_version

logger = get_logger(__name__)

EXIT_SUCCESS = 0
EXIT_DEAD_ENDS = 1
EXIT_FILE_ERROR = 2

_TEXT_RENDERERS = {
    "plain": render_plain,
    "html": render_html,
    "markdown": render_markdown,
}


def load_parser(grammar_path: Path, *, start: str, parser: str) -> Lark:
    """Build a Lark parser from a grammar file.

    Args:
        grammar_path: Path to the ``.lark`` grammar.
        start: Start rule.
        parser: Parser algorithm, ``lalr`` or ``earley``.

    Returns:
        Configured Lark parser.

    Raises:
        OSError: If the grammar cannot be read.
        LarkError: If the grammar is invalid.

    """
    logger.debug("Loading grammar from %s (%s, start=%s)", grammar_path, parser, start)
    return Lark(
        grammar_path.read_text(encoding="utf-8"),
        parser=parser,
        start=start,
        propagate_positions=True,
    )


def write_report(
    console: Console,
    settings: Settings,
    source_path: Path,
    source_text: str,
    records: Sequence[FailureRecord],
) -> None:
    """Write the dead end report in the configured format.

    Args:
        console: Console receiving the report.
        settings: Effective settings.
        source_path: Parsed file, named in the console summary.
        source_text: Parsed text.
        records: Failure records collected from the parser.

    """
    if settings.format == "console":
        print_report(
            console,
            source_text,
            records,
            lines_of_extra_context=settings.context_lines,
        )
        positions = len({record.position for record in records})
        console.print(
            f"Found {positions} dead end{'s' if positions != 1 else ''} "
            f"in {source_path}",
            style="bold",
            markup=False,
            highlight=False,
        )
        return

    renderer = _TEXT_RENDERERS[settings.format]
    report = renderer(
        source_text,
        records,
        lines_of_extra_context=settings.context_lines,
    )
    console.out(report, end="\n" if settings.format == "html" else "", highlight=False)


def run(args: Args, *, console: Console | None = None) -> int:
    """Parse the source file and report its dead ends.

    Args:
        args: Parsed command line arguments.
        console: Console to write to, stdout by default.

    Returns:
        Process exit code.

    """
    console = console or Console()

    if args.grammar is None or args.source is None:
        console.print(
            "error: a grammar file and a source file are required",
            style="red",
        )
        return EXIT_FILE_ERROR

    try:
        settings = load_settings(args)
    except ValueError as e:
        console.print(f"error: {e}", style="red", markup=False, highlight=False)
        return EXIT_FILE_ERROR

    init_logging(settings.log_file, verbose=args.verbose)
    logger.debug("Effective settings: %s", settings)

    try:
        parser = load_parser(args.grammar, start=args.start, parser=settings.parser)
        source_text = args.source.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError, LarkError) as e:
        logger.exception("Failed to prepare parse of %s", args.source)
        console.print(f"error: {e}", style="red", markup=False, highlight=False)
        return EXIT_FILE_ERROR

    records = collect_dead_ends(parser, source_text, max_errors=settings.max_errors)
    if not records:
        logger.info("%s parsed without errors", args.source)
        if settings.format == "console":
            console.print(
                f"{args.source}: no dead ends",
                style="green",
                markup=False,
                highlight=False,
            )
        return EXIT_SUCCESS

    logger.info("%s: %d failure records", args.source, len(records))
    write_report(console, settings, args.source, source_text, records)
    return EXIT_DEAD_ENDS


def cli(args: Args) -> None:
    """Run and exit with the resulting code."""
    if args.version:
        show_version()
    sys.exit(run(args))


def main() -> None:
    """Entry point for the CLI."""
    bind_and_run(cli)


if __name__ == "__main__":
    main()
