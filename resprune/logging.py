"""Logging setup for resprune.

Components log under ``resprune.<component>`` (``resprune.collectors.values``,
``resprune.pruner.engine``...). The console shows progress at INFO, or only
problems with ``quiet``; the optional log file always records the full DEBUG
trail of what was collected, referenced and removed.
"""

from __future__ import annotations

import logging
from pathlib import Path

_LOGGER_NAME = "resprune"
_CONSOLE_PREFIX = "[resprune]"
_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class ConsoleFormatter(logging.Formatter):
    """Plain ``[resprune] message`` for INFO, level-tagged lines otherwise."""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        if record.levelno == logging.INFO:
            return f"{_CONSOLE_PREFIX} {message}"
        return f"{_CONSOLE_PREFIX} {record.levelname} {message}"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a component logger such as ``resprune.pruner``."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def console_level(*, verbose: bool = False, quiet: bool = False) -> int:
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.WARNING
    return logging.INFO


def configure_logging(
    *, verbose: bool = False, quiet: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Install the console handler and, when ``log_file`` is given, a DEBUG file sink."""
    level = console_level(verbose=verbose, quiet=quiet)
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(logging.DEBUG if log_file is not None else level)
    logger.propagate = False

    # Reset handlers to avoid duplicate output when the CLI runs more than once.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(level)
    stream_handler.setFormatter(ConsoleFormatter("%(message)s"))
    logger.addHandler(stream_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT))
        logger.addHandler(file_handler)

    return logger


__all__ = ["ConsoleFormatter", "configure_logging", "console_level", "get_logger"]
