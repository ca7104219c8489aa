"""Tests for the deadends command line tool."""

from collections.abc import Callable
from io import StringIO
from pathlib import Path

import pytest
from rich.console import Console

from deadends.args import Args
from deadends.main import (
    EXIT_DEAD_ENDS,
    EXIT_FILE_ERROR,
    EXIT_SUCCESS,
    cli,
    load_parser,
    run,
)


@pytest.fixture
def buffer() -> StringIO:
    """Buffer capturing console output."""
    return StringIO()


@pytest.fixture
def console(buffer: StringIO) -> Console:
    """Uncolored console writing to the buffer."""
    return Console(file=buffer, width=200, color_system=None)


def write_source(work_dir: Path, content: str) -> Path:
    """Write a source file into the working directory."""
    path = work_dir / "input.let"
    path.write_text(content)
    return path


class TestLoadParser:
    """Test grammar loading."""

    def test_builds_requested_parser(self, grammar_file: Path) -> None:
        """The parser algorithm is taken from the arguments."""
        parser = load_parser(grammar_file, start="start", parser="earley")
        assert parser.options.parser == "earley"


class TestRun:
    """Test the run function."""

    def test_valid_source(
        self,
        work_dir: Path,
        grammar_file: Path,
        make_args: Callable[..., Args],
        console: Console,
        buffer: StringIO,
    ) -> None:
        """A file that parses reports no dead ends."""
        source = write_source(work_dir, "let x = [1, 2]\n")
        result = run(make_args(grammar=grammar_file, source=source), console=console)
        assert result == EXIT_SUCCESS
        assert "no dead ends" in buffer.getvalue()

    def test_dead_ends_console(
        self,
        work_dir: Path,
        grammar_file: Path,
        make_args: Callable[..., Args],
        console: Console,
        buffer: StringIO,
    ) -> None:
        """Dead ends are reported with a summary."""
        source = write_source(work_dir, "let x = ]")
        args = make_args(grammar=grammar_file, source=source, max_errors=1)
        result = run(args, console=console)
        output = buffer.getvalue()
        assert result == EXIT_DEAD_ENDS
        assert "1| let x = ]" in output
        assert 'Expecting one of "[", an integer' in output
        assert "Found 1 dead end in" in output

    def test_plain_format(
        self,
        work_dir: Path,
        grammar_file: Path,
        make_args: Callable[..., Args],
        console: Console,
        buffer: StringIO,
    ) -> None:
        """The plain format prints only the report."""
        source = write_source(work_dir, "let x = ]")
        args = make_args(
            grammar=grammar_file,
            source=source,
            format="plain",
            context_lines=0,
            max_errors=1,
        )
        assert run(args, console=console) == EXIT_DEAD_ENDS
        assert buffer.getvalue() == (
            "1| let x = ]\n"
            "           ^\n"
            "\n"
            '  Expecting one of "[", an integer\n'
        )

    def test_html_format(
        self,
        work_dir: Path,
        grammar_file: Path,
        make_args: Callable[..., Args],
        console: Console,
        buffer: StringIO,
    ) -> None:
        """The html format prints a pre element."""
        source = write_source(work_dir, "let x = ]")
        args = make_args(grammar=grammar_file, source=source, format="html")
        assert run(args, console=console) == EXIT_DEAD_ENDS
        assert buffer.getvalue().startswith('<pre class="deadends">')

    def test_format_from_local_config(
        self,
        work_dir: Path,
        grammar_file: Path,
        make_args: Callable[..., Args],
        console: Console,
        buffer: StringIO,
    ) -> None:
        """Settings are read from the local config file."""
        (work_dir / ".deadends").mkdir()
        (work_dir / ".deadends" / "config.toml").write_text('format = "markdown"\n')
        source = write_source(work_dir, "let x = ]")
        args = make_args(grammar=grammar_file, source=source)
        assert run(args, console=console) == EXIT_DEAD_ENDS
        assert "**^**" in buffer.getvalue()

    def test_missing_source(
        self,
        work_dir: Path,
        grammar_file: Path,
        make_args: Callable[..., Args],
        console: Console,
        buffer: StringIO,
    ) -> None:
        """A missing source file is a file error."""
        args = make_args(grammar=grammar_file, source=work_dir / "missing.let")
        assert run(args, console=console) == EXIT_FILE_ERROR
        assert "error:" in buffer.getvalue()

    def test_invalid_grammar(
        self,
        work_dir: Path,
        make_args: Callable[..., Args],
        console: Console,
    ) -> None:
        """A broken grammar is a file error."""
        grammar = work_dir / "broken.lark"
        grammar.write_text("start: undefined_rule\n")
        source = write_source(work_dir, "x")
        args = make_args(grammar=grammar, source=source)
        assert run(args, console=console) == EXIT_FILE_ERROR

    def test_missing_arguments(
        self,
        work_dir: Path,
        make_args: Callable[..., Args],
        console: Console,
    ) -> None:
        """Both files are required."""
        assert run(make_args(), console=console) == EXIT_FILE_ERROR

    def test_invalid_settings(
        self,
        work_dir: Path,
        grammar_file: Path,
        make_args: Callable[..., Args],
        console: Console,
        buffer: StringIO,
    ) -> None:
        """Invalid settings are reported as errors."""
        source = write_source(work_dir, "let x = 1")
        args = make_args(grammar=grammar_file, source=source, format="pdf")
        assert run(args, console=console) == EXIT_FILE_ERROR
        assert "Unsupported format" in buffer.getvalue()


class TestCli:
    """Test the cli wrapper."""

    def test_exits_with_run_result(
        self,
        work_dir: Path,
        grammar_file: Path,
        make_args: Callable[..., Args],
    ) -> None:
        """The process exit code is the run result."""
        source = write_source(work_dir, "let x = 1\n")
        with pytest.raises(SystemExit) as excinfo:
            cli(make_args(grammar=grammar_file, source=source, format="plain"))
        assert excinfo.value.code == EXIT_SUCCESS

    def test_version(
        self,
        make_args: Callable[..., Args],
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """--version prints the version and exits."""
        with pytest.raises(SystemExit) as excinfo:
            cli(make_args(version=True))
        assert excinfo.value.code == 0
        assert capsys.readouterr().out.startswith("deadends")
