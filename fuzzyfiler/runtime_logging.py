"""Logging setup for a process whose terminal belongs to the UI.

Records go to a file or nowhere; never to stdout/stderr while the picker is
drawing. ``auto`` selects a per-user log directory.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from platformdirs import user_log_dir

from .config import APP_NAME

LOG_FILE_ENV = "FUZZY_FILER_LOG_FILE"
LOG_LEVEL_ENV = "FUZZY_FILER_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
DEFAULT_LEVEL = logging.WARNING

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}


def parse_level(value: str | None, default: int = DEFAULT_LEVEL) -> int:
    if not value:
        return default
    return _LEVELS.get(value.strip().lower(), default)


def resolve_log_file(value: str | os.PathLike[str] | None) -> Path | None:
    if value is None or str(value) == "":
        return None
    if str(value) == "auto":
        return Path(user_log_dir(APP_NAME, appauthor=False)) / f"{APP_NAME}.log"
    return Path(value).expanduser()


def configure_logging(
    level: str | None = None,
    log_file: str | os.PathLike[str] | None = None,
) -> logging.Logger:
    """Attach one handler to the package logger and return that logger.

    Explicit arguments win over ``FUZZY_FILER_LOG_LEVEL`` / ``FUZZY_FILER_LOG_FILE``.
    """
    package_logger = logging.getLogger("fuzzyfiler")
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()
    package_logger.propagate = False

    effective_level = parse_level(level or os.environ.get(LOG_LEVEL_ENV))
    target = resolve_log_file(log_file or os.environ.get(LOG_FILE_ENV))
    package_logger.setLevel(effective_level)

    if target is None:
        package_logger.addHandler(logging.NullHandler())
        return package_logger

    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(target, encoding="utf-8")
    except OSError:
        handler = logging.NullHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    package_logger.addHandler(handler)
    package_logger.debug("logging to %s", target)
    return package_logger
