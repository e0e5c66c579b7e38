# === FILE: bucket_scout/logger.py ===
"""Project-wide logging configuration for **BucketScout**.

Highlights
----------
* Unified format for console and optional file output (with rotation).
* Single, importable instance :data:`logger` – simply::

      from bucket_scout.logger import logger
      logger.info("Scanning started")
* Components log through children of the project logger
  (``BucketScout.fetcher``, ``BucketScout.scanner`` …).
* Result lines go to ``BucketScout.results``; they reach the log file but are
  kept off the console handler, the reporter prints them itself.
* Re‑configurable at runtime via :func:`configure`.
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final, Union

# --------------------------------------------------------------------------- #
# Constants & basic types                                                     #
# --------------------------------------------------------------------------- #

_DEFAULT_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_LOGGER_NAME: Final[str] = "BucketScout"
RESULTS_LOGGER: Final[str] = f"{_LOGGER_NAME}.results"

_LevelT = Union[int, str]


# --------------------------------------------------------------------------- #
# Helper builders                                                             #
# --------------------------------------------------------------------------- #


def _not_a_result(record: logging.LogRecord) -> bool:
    return not record.name.startswith(RESULTS_LOGGER)


def _stdout_handler(fmt: str, level: _LevelT) -> logging.StreamHandler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(fmt))
    handler.setLevel(level)
    handler.addFilter(_not_a_result)
    return handler


def _file_handler(file: Path | str, fmt: str) -> RotatingFileHandler:
    handler = RotatingFileHandler(
        filename=str(file),
        maxBytes=5 * 1024 * 1024,
        backupCount=3,
        encoding="utf-8",
    )
    handler.setFormatter(logging.Formatter(fmt))
    handler.setLevel(logging.DEBUG)
    return handler


def get_logger(component: str | None = None) -> logging.Logger:
    """Return the project logger or one of its children."""
    if not component:
        return logging.getLogger(_LOGGER_NAME)
    return logging.getLogger(f"{_LOGGER_NAME}.{component}")


# --------------------------------------------------------------------------- #
# Public API                                                                  #
# --------------------------------------------------------------------------- #


def configure(
    *,
    level: _LevelT = "WARNING",
    log_file: str | Path | None = None,
    log_format: str = _DEFAULT_FORMAT,
    replace_handlers: bool = True,
) -> logging.Logger:
    """(Re)configure the global project logger.

    Parameters
    ----------
    level
        Numeric or textual console logging level (e.g. ``"DEBUG"``).
    log_file
        Path to a logfile. *None* → console‑only output. The file always
        receives DEBUG and above. Raises :class:`OSError` when the file
        cannot be opened.
    log_format
        Format string for :class:`logging.Formatter`.
    replace_handlers
        *True* – remove existing handlers; *False* – just append new one(s).
    """
    lg = logging.getLogger(_LOGGER_NAME)

    if replace_handlers:
        for handler in list(lg.handlers):
            lg.removeHandler(handler)
            handler.close()

    lg.addHandler(_stdout_handler(log_format, level))

    if log_file is not None:
        lg.addHandler(_file_handler(log_file, log_format))
        lg.setLevel(logging.DEBUG)
    else:
        lg.setLevel(level)

    lg.propagate = False
    return lg


def init_logging(level: _LevelT = "WARNING", log_file: str | Path | None = None) -> logging.Logger:
    """Console-only setup used at import time."""
    return configure(level=level, log_file=log_file, replace_handlers=True)


# --------------------------------------------------------------------------- #
# Ready‑to‑use instance                                                       #
# --------------------------------------------------------------------------- #

logger: logging.Logger = init_logging()

__all__ = ["logger", "configure", "init_logging", "get_logger", "RESULTS_LOGGER"]
