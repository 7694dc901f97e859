"""Loguru configuration for the API process."""
import sys
from typing import Optional

from loguru import logger


def configure_logging(level: str = "INFO", log_file: Optional[str] = None) -> None:
    """Configure loguru logger with the specified level."""
    logger.remove()
    logger.add(
        sys.stderr,
        level=level.upper(),
        format=(
            "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{module}</cyan>:<cyan>{line}</cyan> - "
            "{message}"
        ),
    )
    if log_file:
        logger.add(
            log_file,
            level=level.upper(),
            rotation="10 MB",
            retention=5,
            enqueue=True,
        )
