"""
Logging Configuration
=====================
Attaches console and file handlers to the 'imagegeometry' logger namespace.

Repeated calls replace the handlers installed by a previous call and leave
handlers added by the host application alone.
"""
import logging
import sys
from typing import List, Optional

from imagegeometry.config import LOG_FILE, LOG_LEVEL

PACKAGE_LOGGER = "imagegeometry"
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%H:%M:%S'

# Marker attribute set on every handler created here
_OWNED = "_imagegeometry_handler"


def _owned_handlers(logger: logging.Logger) -> List[logging.Handler]:
    return [h for h in logger.handlers if getattr(h, _OWNED, False)]


def _make_handler(handler: logging.Handler, level: int) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    setattr(handler, _OWNED, True)
    return handler


def setup_logging(level: int = LOG_LEVEL, log_file: Optional[str] = LOG_FILE) -> logging.Logger:
    """
    Configure the 'imagegeometry' logger.

    Args:
        level: Logging level (e.g. logging.DEBUG). Defaults to IMAGEGEOMETRY_LOG_LEVEL.
        log_file: Optional path of a log file. Defaults to IMAGEGEOMETRY_LOG_FILE.

    Returns:
        The configured package logger.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)

    for handler in _owned_handlers(logger):
        logger.removeHandler(handler)
        handler.close()

    logger.addHandler(_make_handler(logging.StreamHandler(sys.stdout), level))
    if log_file:
        logger.addHandler(_make_handler(logging.FileHandler(log_file, mode='w', encoding='utf-8'), level))

    logger.debug(f"Logging initialized (level={logging.getLevelName(level)}, file={log_file}).")
    return logger
