import sys

from loguru import logger

from timeshell.config import LOG_LEVEL

_FORMAT = "{time:HH:mm:ss.SSS} | {level:<7} | {name}:{function}:{line} | {message}"
_configured_level = None


def configure_logging(level=None):
    """Send loguru records to stderr at the given level, once per level"""
    global _configured_level

    level = (level or LOG_LEVEL).upper()
    if level == _configured_level:
        return

    logger.remove()
    logger.add(
        sys.stderr,
        level=level,
        format=_FORMAT,
        backtrace=False,
        diagnose=False,
    )
    _configured_level = level
