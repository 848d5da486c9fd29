"""
Logging for the generator.

Every module logs through ``get_logger(__name__)``, so all of them hang off
the single ``tuplegen`` logger. The CLI calls :func:`setup_logging` once with
its ``--log-level`` / ``--log-file`` flags; library users who never call it
get plain propagation to whatever the host application configured.
"""

import logging
import os
from typing import List, Optional

PACKAGE_LOGGER = "tuplegen"

LOG_LEVEL_ENV = "TUPLEGEN_LOG_LEVEL"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def resolve_level(level: Optional[str] = None) -> int:
    """
    Turn a level name into a numeric level.

    None reads TUPLEGEN_LOG_LEVEL. Missing or unknown names give INFO.
    """
    name = level if level is not None else os.environ.get(LOG_LEVEL_ENV, "INFO")
    value = logging.getLevelName(name.upper())
    return value if isinstance(value, int) else logging.INFO


def _handlers(log_file: Optional[str]) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    return handlers


def setup_logging(level: Optional[str] = None, log_file: Optional[str] = None) -> logging.Logger:
    """
    (Re)configure the ``tuplegen`` logger.

    Handlers from an earlier call are closed and replaced, so calling this
    twice never duplicates output. The logger stops propagating to root.

    Args:
        level: Level name, see :func:`resolve_level`
        log_file: Also append records to this file

    Returns:
        The configured package logger
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    log_level = resolve_level(level)
    formatter = logging.Formatter(LOG_FORMAT)
    for handler in _handlers(log_file):
        handler.setLevel(log_level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.setLevel(log_level)
    logger.propagate = False
    return logger


def get_logger(name: str) -> logging.Logger:
    """Logger for ``name`` under the ``tuplegen`` namespace (``__name__`` is kept as is)."""
    if name == PACKAGE_LOGGER or name.startswith(f"{PACKAGE_LOGGER}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{PACKAGE_LOGGER}.{name}")
