"""Logging helpers shared by the resgen pipeline and CLI."""

from __future__ import annotations

import logging
from pathlib import Path

ROOT_LOGGER = "resgen"

_CONSOLE_FORMAT = "[resgen] %(levelname)s %(message)s"
# Source scans log from worker threads; the file sink keeps the thread name.
_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s [%(threadName)s]: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return ``resgen.<name>``, or the package root logger when ``name`` is empty."""
    return logging.getLogger(f"{ROOT_LOGGER}.{name}" if name else ROOT_LOGGER)


def _reset_handlers(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def configure_logging(*, verbose: bool = False, log_file: Path | None = None) -> logging.Logger:
    """Send resgen records to stderr, and to ``log_file`` when given.

    Safe to call repeatedly: previously installed handlers are closed first.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = get_logger()
    logger.setLevel(level)
    logger.propagate = False
    _reset_handlers(logger)

    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(logging.Formatter(_CONSOLE_FORMAT))
    logger.addHandler(console)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        sink = logging.FileHandler(log_file, encoding="utf-8")
        sink.setLevel(logging.DEBUG)
        sink.setFormatter(logging.Formatter(_FILE_FORMAT))
        logger.addHandler(sink)
        # The file always receives debug records.
        logger.setLevel(logging.DEBUG)

    return logger


__all__ = ["ROOT_LOGGER", "configure_logging", "get_logger"]
