"""Logging utilities for scout commands."""

from __future__ import annotations

import logging
from pathlib import Path

_LOGGER_NAME = "scout"

# Document parsers that emit a warning for each malformed file they open.
PARSER_LOGGERS = ("pypdf", "openpyxl", "docx")


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the scout hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Configure scout's console and file output.

    Extraction runs in a worker pool, so verbose records carry the thread
    name. Document parser loggers are held at ERROR unless ``verbose`` is set.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_format = "[scout] %(levelname)s %(message)s"
    if verbose:
        console_format = "[scout] %(levelname)s [%(threadName)s] %(message)s"
    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(level)
    stream_handler.setFormatter(logging.Formatter(console_format))
    logger.addHandler(stream_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(threadName)s %(name)s: %(message)s")
        )
        logger.addHandler(file_handler)

    parser_level = logging.WARNING if verbose else logging.ERROR
    for name in PARSER_LOGGERS:
        logging.getLogger(name).setLevel(parser_level)

    return logger


__all__ = ["PARSER_LOGGERS", "configure_logging", "get_logger"]
