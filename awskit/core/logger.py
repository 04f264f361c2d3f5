# core/logger.py
import logging

from awskit.core.config import Settings

logger = logging.getLogger("awskit")
logger.setLevel(logging.INFO)
logger.propagate = False

# Always add a console handler with a simple, structured-ish format
_console = logging.StreamHandler()
_console.setLevel(logging.INFO)
_console.setFormatter(logging.Formatter(
    fmt="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%S%z",
))
logger.addHandler(_console)


def configure_logger(settings: Settings) -> logging.Logger:
    """Apply the level implied by settings.DEBUG to the library logger."""
    level = logging.DEBUG if settings.DEBUG else logging.INFO
    logger.setLevel(level)
    _console.setLevel(level)
    return logger

