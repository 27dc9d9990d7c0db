"""Logging helpers shared by ktgate tasks and the CLI."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Callable, Iterable

_ROOT = "ktgate"
_PLAIN_FORMAT = "[ktgate] %(levelname)s %(message)s"
_VERBOSE_FORMAT = "[ktgate] %(levelname)s %(name)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Child logger of ``ktgate``, e.g. ``get_logger("tasks")`` -> ``ktgate.tasks``."""
    return logging.getLogger(f"{_ROOT}.{name}" if name else _ROOT)


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Route ktgate records to stderr and, when given, append them to ``log_file``.

    ``verbose`` adds debug records and logger names on the console.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_ROOT)
    logger.setLevel(level)
    logger.propagate = False

    # main() may run more than once in one interpreter (tests).
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(_VERBOSE_FORMAT if verbose else _PLAIN_FORMAT))
    logger.addHandler(handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
        logger.addHandler(file_handler)
    return logger


def log_ktlint_debug(
    logger: logging.Logger,
    enabled: bool,
    produce: Callable[[], Iterable[str]],
) -> None:
    """Emit ktlint debug lines as warnings so they show without ``--verbose``.

    ``produce`` is only called when debugging is enabled.
    """
    if not enabled:
        return
    for line in produce():
        logger.warning("[KtLint DEBUG] %s", line)


__all__ = ["configure_logging", "get_logger", "log_ktlint_debug"]
