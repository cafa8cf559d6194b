"""Configure the loguru logger used across the service."""

from __future__ import annotations

import sys

from loguru import logger

from .constants import DEFAULT_LOG_LEVEL

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{module}</cyan>:<cyan>{line}</cyan> - "
    "{message}"
)


def configure_logging(level: str = DEFAULT_LOG_LEVEL, sink=sys.stderr) -> int:
    """Replace loguru's default handler with a single sink at *level*.

    Returns the id of the added handler.
    """
    logger.remove()
    return logger.add(sink, level=level.upper(), format=LOG_FORMAT)
