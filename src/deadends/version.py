"""Version utility for the deadends tool."""

import sys
from importlib.metadata import PackageNotFoundError, version


def get_deadends_version() -> str:
    """Get the installed deadends version.

    Returns:
        Version string or "unknown" if version cannot be determined

    """
    try:
        return version("deadends")
    except PackageNotFoundError:
        return "unknown"


def show_version() -> None:
    """Display the application version and exit."""
    app_version = get_deadends_version()
    if app_version == "unknown":
        print("deadends (version unknown)")  # noqa: T201
    else:
        print(f"deadends {app_version}")  # noqa: T201
    sys.exit(0)
