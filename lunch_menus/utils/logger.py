import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

LOG_FORMAT = '%(asctime)s %(levelname)s: %(message)s'


def configure_logging(level: str = 'INFO', log_file: Optional[str] = None) -> logging.Logger:
    """Configure the package logger for a run

    Console output always goes to stderr. When log_file is given the same
    records are also written to a rotating file.
    """
    logger = logging.getLogger('lunch_menus')
    logger.setLevel(getattr(logging, str(level).upper(), logging.INFO))

    # Re-running main() in the same process must not stack handlers
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(console_handler)

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=10240,
            backupCount=10
        )
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(file_handler)

    # Records stop here even when the host has configured the root logger
    logger.propagate = False

    return logger
