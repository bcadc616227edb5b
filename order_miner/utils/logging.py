"""
Logging configuration for the Order Miner.
"""
import sys
from typing import Optional

from loguru import logger
from config.settings import settings


def _resolve_level(level: Optional[str]) -> str:
    if level:
        return level.upper()
    if settings.app.debug:
        return "DEBUG"
    return settings.logging.level.upper()


def setup_logging(level: Optional[str] = None) -> str:
    """
    Configure logging for the command line.
    Console output goes to stderr so it does not interleave with the panel
    prompts on stdout. ``APP_DEBUG`` forces DEBUG unless a level is passed.
    Returns the level in effect.
    """
    effective = _resolve_level(level)
    logger.remove()

    logger.add(
        sys.stderr,
        format=settings.logging.format,
        level=effective,
        colorize=True
    )

    logger.add(
        settings.logging.file,
        format=settings.logging.format,
        level=effective,
        rotation="10 MB",
        retention="1 month",
        compression="zip"
    )

    logger.info(f"{settings.app.name} {settings.app.version} logging at {effective} to {settings.logging.file}")
    return effective
