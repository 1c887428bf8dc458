import logging
import sys
from photo_filters.config import settings

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
PACKAGE_LOGGER_PREFIX = 'photo_filters'


def _resolve_level(name):
    """Map a level name such as 'debug' to its logging constant, INFO when unknown."""
    level = logging.getLevelName(str(name).upper())
    return level if isinstance(level, int) else logging.INFO


log_level = _resolve_level(getattr(settings, 'LOGGING_LEVEL', 'INFO'))

# One stdout handler shared by every package logger
console_handler = logging.StreamHandler(sys.stdout)
console_handler.setFormatter(logging.Formatter(LOG_FORMAT))


def get_logger(name):
    """
    Gets a logger writing to the shared console handler at the configured level.
    """
    logger = logging.getLogger(name)
    logger.setLevel(log_level)
    if console_handler not in logger.handlers:
        logger.addHandler(console_handler)
    logger.propagate = False
    return logger


def set_level(level_name):
    """Change the level of every photo_filters logger, including ones created later."""
    global log_level
    log_level = _resolve_level(level_name)
    for name, logger in logging.Logger.manager.loggerDict.items():
        if name.startswith(PACKAGE_LOGGER_PREFIX) and isinstance(logger, logging.Logger):
            logger.setLevel(log_level)
