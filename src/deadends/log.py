"""Logging helper module."""

from logging import (
    DEBUG,
    INFO,
    Logger,
    basicConfig,
    getLogger,
)
from pathlib import Path

LOG_FILE = "deadends.log"
"""Default file receiving the application log."""

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def init_logging(log_file: str = LOG_FILE, *, verbose: bool = False) -> None:
    """Send application logs to a file.

    Console output belongs to the report, so nothing is logged there.
    Should be called once, after the settings naming the file are known.

    Args:
        log_file: Path of the log file, truncated on every run.
        verbose: Log at DEBUG level instead of INFO.

    """
    Path(log_file).parent.mkdir(parents=True, exist_ok=True)
    basicConfig(
        level=DEBUG if verbose else INFO,
        format=LOG_FORMAT,
        filename=log_file,
        filemode="w",
    )
    configure_3p_loggers(getLogger())
    if verbose:
        getLogger(__name__).debug("Debug logging enabled, writing to %s", log_file)


def get_logger(name: str) -> Logger:
    """Proxy for logging.getLogger."""
    return getLogger(name)


def configure_3p_loggers(root_logger: Logger) -> None:
    """Drop handlers installed by third-party libraries such as lark."""
    for name in root_logger.manager.loggerDict:
        if name.startswith("deadends"):
            continue  # Skip our own loggers
        getLogger(name).handlers.clear()
