"""Logger configuration for planning-encoder.

Modules log through the `logger` re-exported here. It stays silent for
library callers until `setup_logger` is called.
"""

import sys

from loguru import logger

logger.disable("planning_encoder")


def setup_logger(level: str = "INFO") -> None:
    """Configure loguru with a single console sink and enable package logs.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """
    # Remove default handler
    logger.remove()

    logger.add(
        sys.stderr,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
        level=level,
        colorize=True,
    )
    logger.enable("planning_encoder")

    logger.info(f"Logger initialized with level={level}")
