"""Logging setup."""

import logging

from .config import Settings

_configured = False


def configure_logging(settings: Settings) -> None:
    """Apply LOG_LEVEL / LOG_FORMAT to the root logger once per process."""
    global _configured
    if _configured:
        return

    level = logging.getLevelName(settings.LOG_LEVEL.upper())
    if not isinstance(level, int):
        level = logging.INFO

    logging.basicConfig(level=level, format=settings.LOG_FORMAT)
    # httpx logs every backend request at INFO
    logging.getLogger("httpx").setLevel(max(level, logging.WARNING))
    _configured = True
