import sys

from loguru import logger


def configure_logging(level: str = "INFO") -> None:
    """Send loguru output to stderr at ``level``, replacing the default sink."""
    logger.remove()
    logger.add(sys.stderr, level=level.upper(), format="{time:HH:mm:ss} | {level: <7} | {message}")
