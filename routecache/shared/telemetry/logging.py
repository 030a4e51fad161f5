"""Logging setup for the routecache package logger."""

import logging
import sys

from routecache.core.config import Settings, get_settings

PACKAGE_LOGGER = "routecache"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(settings: Settings | None = None) -> logging.Logger:
    """Configure the "routecache" logger; the root logger is left alone.

    Level is DEBUG when settings.debug is True (cache HIT/MISS/SET lines),
    otherwise INFO. A stdout handler is attached once; records still
    propagate to the host application's handlers.

    Returns:
        The package logger.
    """
    settings = settings or get_settings()
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(logging.DEBUG if settings.debug else logging.INFO)
    if not any(getattr(h, "_routecache", False) for h in logger.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._routecache = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
    return logger
