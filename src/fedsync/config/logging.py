"""Logging setup for the fedsync CLI."""

from __future__ import annotations

import logging
import os

from .errors import ConfigurationError

LOG_LEVEL_ENV = "FEDSYNC_LOG_LEVEL"

# httpx logs every fetched object at INFO
_CHATTY_LOGGERS = ("httpx", "httpcore")


def configure_logging(*, level: int | str | None = None, force: bool = False) -> None:
    """Initialise the root logger once.

    ``level`` defaults to ``FEDSYNC_LOG_LEVEL`` and then to INFO. Remote fetch
    logs only show up at DEBUG. Pass ``force=True`` to reconfigure in tests.
    """

    resolved = _resolve_level(level if level is not None else os.getenv(LOG_LEVEL_ENV))
    logging.basicConfig(
        level=resolved,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )
    chatty_level = resolved if resolved <= logging.DEBUG else max(resolved, logging.WARNING)
    for name in _CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(chatty_level)


def _resolve_level(level: int | str | None) -> int:
    if level is None or (isinstance(level, str) and not level.strip()):
        return logging.INFO
    if isinstance(level, int):
        return level
    resolved = logging.getLevelNamesMapping().get(level.strip().upper())
    if resolved is None:
        raise ConfigurationError(f"{LOG_LEVEL_ENV} must be a logging level name, got {level!r}")
    return resolved
