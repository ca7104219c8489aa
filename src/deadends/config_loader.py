"""Configuration loader for the deadends tool."""

import tomllib
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

from deadends.args import Args
from deadends.log import LOG_FILE, get_logger

logger = get_logger(__name__)

CONFIG_DIR = ".deadends"
CONFIG_FILE = "config.toml"

FORMATS = ("console", "plain", "html", "markdown")
PARSERS = ("lalr", "earley")


@dataclass(frozen=True)
class Settings:
    """Effective report settings."""

    context_lines: int = 2
    """Source lines shown before and after each failure."""

    format: str = "console"
    """Report format, one of ``FORMATS``."""

    parser: str = "lalr"
    """Lark parser algorithm, one of ``PARSERS``."""

    max_errors: int = 10
    """Maximum number of errors collected by the lalr parser."""

    log_file: str = LOG_FILE
    """File receiving the application log."""

    def validate(self) -> "Settings":
        """Check option values.

        Returns:
            Self, for chaining.

        Raises:
            ValueError: If an option has an unsupported value.

        """
        for name in ("context_lines", "max_errors"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                msg = f"{name} must be an integer, got {value!r}"
                raise ValueError(msg)
        if self.format not in FORMATS:
            msg = (
                f"Unsupported format '{self.format}', "
                f"expected one of {', '.join(FORMATS)}"
            )
            raise ValueError(msg)
        if self.parser not in PARSERS:
            msg = (
                f"Unsupported parser '{self.parser}', "
                f"expected one of {', '.join(PARSERS)}"
            )
            raise ValueError(msg)
        if self.context_lines < 0:
            msg = f"context_lines must be non-negative, got {self.context_lines}"
            raise ValueError(msg)
        if self.max_errors < 1:
            msg = f"max_errors must be positive, got {self.max_errors}"
            raise ValueError(msg)
        if not isinstance(self.log_file, str) or not self.log_file:
            msg = f"log_file must be a non-empty string, got {self.log_file!r}"
            raise ValueError(msg)
        return self


_SETTING_NAMES = frozenset(f.name for f in fields(Settings))


def _read_config(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    try:
        with path.open("rb") as f:
            config = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.debug("Failed to load config %s: %s", path, e)
        return {}
    unknown = set(config) - _SETTING_NAMES
    if unknown:
        logger.debug(
            "Ignoring unknown keys in %s: %s",
            path,
            ", ".join(sorted(unknown)),
        )
    return {key: value for key, value in config.items() if key in _SETTING_NAMES}


def load_settings(args: Args, *, home: Path | None = None) -> Settings:
    """Load settings with priority: CLI > local > global > defaults.

    Args:
        args: Parsed command line arguments
        home: Home directory holding the global configuration, defaults
            to the user's home directory

    Returns:
        Validated settings

    Raises:
        ValueError: If the resulting settings are invalid.

    """
    global_config_path = (home or Path.home()) / CONFIG_DIR / CONFIG_FILE
    local_config_path = args.working_dir / CONFIG_DIR / CONFIG_FILE

    values: dict[str, Any] = {}
    values.update(_read_config(global_config_path))
    values.update(_read_config(local_config_path))

    cli_values = {
        "context_lines": args.context_lines,
        "format": args.format,
        "parser": args.parser,
        "max_errors": args.max_errors,
        "log_file": args.log_file,
    }
    values.update(
        {key: value for key, value in cli_values.items() if value is not None},
    )

    return replace(Settings(), **values).validate()
