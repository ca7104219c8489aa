"""Shared fixtures for command line tests."""

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from deadends.args import Args

GRAMMAR = r"""
start: "let" NAME "=" value
?value: INT
      | list
list: "[" [value ("," value)*] "]"
NAME: /[a-z_]+/
%import common.INT
%import common.WS
%ignore WS
"""


@pytest.fixture
def work_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolated working and home directories."""
    home = tmp_path / "home"
    home.mkdir()
    cwd = tmp_path / "work"
    cwd.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(cwd)
    return cwd


@pytest.fixture
def grammar_file(work_dir: Path) -> Path:
    """Grammar file for a tiny let-binding language."""
    path = work_dir / "let.lark"
    path.write_text(GRAMMAR)
    return path


@pytest.fixture
def make_args() -> Callable[..., Args]:
    """Build Args with every option set, overridable by keyword."""

    def factory(**overrides: Any) -> Args:
        values: dict[str, Any] = {
            "grammar": None,
            "source": None,
            "start": "start",
            "parser": None,
            "context_lines": None,
            "format": None,
            "max_errors": None,
            "log_file": None,
            "verbose": False,
            "version": False,
        }
        values.update(overrides)
        return Args(**values)

    return factory
