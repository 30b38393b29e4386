"""Application logger for FocusFlow CLI.

Records go to a rotating file in the platform log directory and never to the
terminal, so command output stays clean for ``--output json``. The level
defaults to DEBUG and can be lowered with ``FOCUSFLOW_LOG_LEVEL=WARNING``.
"""

from __future__ import annotations

import logging
import logging.handlers
import os
from pathlib import Path

from platformdirs import user_log_dir

LOG_LEVEL_ENV = "FOCUSFLOW_LOG_LEVEL"

_APP_NAME = "focusflow_cli"
_LOG_FILE = "focusflow.log"
_MAX_BYTES = 5 * 1024 * 1024  # 5 MB
_BACKUP_COUNT = 3
_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"

_logger: logging.Logger | None = None


def log_file_path() -> Path:
    """Path of the active log file."""
    return Path(user_log_dir(_APP_NAME)) / _LOG_FILE


def _level_from_env() -> int:
    level = logging.getLevelName(os.environ.get(LOG_LEVEL_ENV, "DEBUG").upper())
    return level if isinstance(level, int) else logging.DEBUG


def _configure() -> logging.Logger:
    path = log_file_path()
    path.parent.mkdir(parents=True, exist_ok=True)

    handler = logging.handlers.RotatingFileHandler(
        path, maxBytes=_MAX_BYTES, backupCount=_BACKUP_COUNT, encoding="utf-8"
    )
    handler.setFormatter(logging.Formatter(fmt=_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S"))

    logger = logging.getLogger(_APP_NAME)
    logger.setLevel(_level_from_env())
    if not logger.handlers:
        logger.addHandler(handler)
    logger.propagate = False
    return logger


def get_logger(name: str | None = None) -> logging.Logger:
    """Return the application logger, configuring it on first use.

    Args:
        name: Optional child name, e.g. ``"sync"`` for ``focusflow_cli.sync``
    """
    global _logger
    if _logger is None:
        _logger = _configure()
    return _logger if name is None else _logger.getChild(name)
