"""Logging setup for relguard.

The audit report is printed to stdout by the CLI; log records go to stderr
and, optionally, a file. Console logging stays at WARNING unless ``--verbose``
is given so read/write failures surface without drowning the report. A log
file, when requested, always records DEBUG detail.
"""

from __future__ import annotations

import logging
from pathlib import Path

_LOGGER_NAME = "relguard"
_CONSOLE_FORMAT = "[relguard] %(levelname)s %(message)s"
_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return ``relguard.<name>``, or the package logger when ``name`` is empty."""
    return logging.getLogger(f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME)


def _console_handler(level: int) -> logging.Handler:
    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(_CONSOLE_FORMAT))
    return handler


def _file_handler(log_file: Path) -> logging.Handler:
    handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(_FILE_FORMAT))
    return handler


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Install fresh handlers on the package logger and return it.

    Safe to call once per CLI invocation; previous handlers are dropped.
    """
    console_level = logging.DEBUG if verbose else logging.WARNING
    handlers = [_console_handler(console_level)]
    if log_file is not None:
        handlers.append(_file_handler(log_file))

    logger = logging.getLogger(_LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    for handler in handlers:
        logger.addHandler(handler)
    logger.setLevel(min(handler.level for handler in handlers))
    logger.propagate = False
    return logger


__all__ = ["configure_logging", "get_logger"]
