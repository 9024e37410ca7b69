"""Logging setup for jumppack.

Logging is off unless enabled through ``options.log_level`` or the
``JUMPPACK_LOG_LEVEL`` environment variable. Records go to a file in the
user state directory so they never disturb the terminal UI.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from platformdirs import user_state_dir

from .config import APP_NAME

TRACE = 5
LOG_ENV_VAR = "JUMPPACK_LOG_LEVEL"
LOG_FORMAT = "[%(levelname)-5s %(asctime)s] %(module)s:%(lineno)d: %(message)s"
DEFAULT_LOG_PATH = Path(user_state_dir(APP_NAME, appauthor=False)) / "jumppack.log"

_LEVELS: dict[str, int] = {
    "trace": TRACE,
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}

logging.addLevelName(TRACE, "TRACE")


def resolve_log_level(configured: str) -> str:
    """Return the effective level name; the environment wins over config."""
    level = os.environ.get(LOG_ENV_VAR) or configured or "off"
    level = level.lower()
    if level != "off" and level not in _LEVELS:
        return "off"
    return level


def setup_logging(configured: str = "off", log_path: Path | None = None) -> logging.Logger:
    """Configure the ``jumppack`` logger and return it."""
    logger = logging.getLogger(APP_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    level = resolve_log_level(configured)
    logger.propagate = False
    if level == "off":
        # Module loggers inherit this level; the null handler keeps warnings off stderr.
        logger.addHandler(logging.NullHandler())
        logger.setLevel(logging.CRITICAL + 1)
        return logger

    path = log_path or DEFAULT_LOG_PATH
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(path, encoding="utf-8")
    except OSError:
        handler = logging.NullHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S"))
    logger.addHandler(handler)
    logger.setLevel(_LEVELS[level])
    return logger
