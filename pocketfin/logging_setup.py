"""Logging for pocketfin.

Modules log through ``get_logger(__name__)`` and stay silent until the CLI
calls ``configure_logging`` at startup, which sends pocketfin records to
stderr. Console output meant for the user goes through rich, not logging.
"""

import logging
import os
import sys
from typing import IO

LOGGER_NAME = "pocketfin"
LEVEL_ENV_VAR = "POCKETFIN_LOG_LEVEL"
LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"

logging.getLogger(LOGGER_NAME).addHandler(logging.NullHandler())


def resolve_level(level: str | None = None) -> int:
    """Pick the log level.

    Args:
        level: Level name such as "INFO", usually from --log-level.

    Returns:
        The named level, else the POCKETFIN_LOG_LEVEL level, else WARNING.
        Unknown names are ignored.
    """
    for name in (level, os.environ.get(LEVEL_ENV_VAR)):
        if not name:
            continue
        numeric = logging.getLevelName(name.strip().upper())
        if isinstance(numeric, int):
            return numeric
    return logging.WARNING


def configure_logging(level: str | None = None, stream: IO[str] = sys.stderr) -> None:
    """Attach the stderr handler to the pocketfin logger; later calls only adjust the level."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(resolve_level(level))
    logger.propagate = False

    if not any(getattr(handler, "pocketfin_cli", False) for handler in logger.handlers):
        handler = logging.StreamHandler(stream)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler.pocketfin_cli = True  # type: ignore[attr-defined]
        logger.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
