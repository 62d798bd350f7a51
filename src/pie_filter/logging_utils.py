"""Console logging for the CLI and the HTTP service."""
from __future__ import annotations

import logging

from .config import Settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def resolve_level(level: str | int) -> int:
    """Return the numeric level for ``level``; unknown names mean INFO."""

    if isinstance(level, int):
        return level
    numeric = logging.getLevelName(level.strip().upper())
    return numeric if isinstance(numeric, int) else logging.INFO


def configure_logging(settings: Settings, *, verbose: bool = False) -> None:
    """Apply ``settings.log_level`` (or DEBUG when ``verbose``) to the root logger.

    An already configured root logger, e.g. one set up by uvicorn, keeps its
    handlers and only has its level adjusted.
    """

    level = logging.DEBUG if verbose else resolve_level(settings.log_level)
    root_logger = logging.getLogger()
    if root_logger.handlers:
        root_logger.setLevel(level)
        return
    logging.basicConfig(level=level, format=LOG_FORMAT)


__all__ = ["LOG_FORMAT", "configure_logging", "resolve_level"]
