"""
logging_config.py — Logger Set-up
=================================

Every module logs through logging.getLogger(__name__), so all records
end up under the 'cube2oct' logger configured here.  Progress goes to
stdout; pass log_file to keep a copy of a batch run.
"""
import logging
import sys
from typing import List, Optional

PACKAGE_LOGGER = "cube2oct"
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%H:%M:%S'


def _handlers(log_file: Optional[str]) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='w', encoding='utf-8'))
    return handlers


def setup_logging(level: int = logging.INFO,
                  log_file: Optional[str] = None) -> logging.Logger:
    """
    Route the package's log records to stdout and, optionally, a file.

    Calling it again replaces the previous handlers, so a second CLI run
    in the same process does not print every record twice.

    Returns:
        the configured 'cube2oct' logger
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)
    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in _handlers(log_file):
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.debug("logging at %s%s", logging.getLevelName(level),
                 f", copy in {log_file}" if log_file else "")
    return logger
