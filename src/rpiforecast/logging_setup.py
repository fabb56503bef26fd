"""Logging configuration for the forecast display."""

from __future__ import annotations

import logging
from typing import Final

from rpiforecast.settings.user import LoggingSettings
from rpiforecast.utils.file import ensure_directory_exists

LOG_FORMAT: Final = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

logger: Final = logging.getLogger(__name__)


def configure_logging(settings: LoggingSettings | None = None, debug: bool = False) -> None:
    """Install console and/or file handlers on the root logger.

    Args:
        settings: Logging section of the user settings, defaults if None
        debug: Force DEBUG level regardless of the configured level
    """
    settings = settings or LoggingSettings()
    level = logging.DEBUG if debug else getattr(logging, settings.level)

    handlers: list[logging.Handler] = []
    if settings.log_to_console:
        handlers.append(logging.StreamHandler())
    if settings.log_to_file:
        ensure_directory_exists(settings.file_path.parent)
        handlers.append(logging.FileHandler(settings.file_path, encoding="utf-8"))
    if not handlers:
        handlers.append(logging.NullHandler())

    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers, force=True)
    logger.debug(
        "Logging configured (console=%s, file=%s)",
        settings.log_to_console,
        settings.file_path if settings.log_to_file else None,
    )
