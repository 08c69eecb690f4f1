"""Logging configuration."""

import sys
from pathlib import Path
from typing import Optional, Union

from loguru import logger

CONSOLE_FORMAT = (
    "<level>{level}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:"
    "<cyan>{line}</cyan> - <level>{message}</level>"
)


def setup_logging(
    level: str = "WARNING",
    log_file: Optional[Union[str, Path]] = None
) -> None:
    """Configure loguru sinks.

    Args:
        level: Minimum level for all sinks
        log_file: Optional file to log to in addition to stderr
    """
    logger.remove()  # Remove default handler

    logger.add(sink=sys.stderr, level=level, format=CONSOLE_FORMAT)

    if log_file:
        logger.add(
            sink=str(log_file),
            level=level,
            rotation="100 MB",
            retention="1 week"
        )
