import logging
from logging.handlers import RotatingFileHandler

from .config import Config

__all__ = ["get_logger"]

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def get_logger(name: str = "mobile_lookup") -> logging.Logger:
    """Logger for upload/search/export messages, printed to the console.

    Handlers are attached on the first call for a given name only. Setting
    ``MOBILE_LOOKUP_LOG_FILE`` also writes to a rotating file next to it.
    """
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    logger.setLevel(getattr(logging, Config.LOG_LEVEL, logging.INFO))
    formatter = logging.Formatter(LOG_FORMAT)

    console = logging.StreamHandler()
    console.setFormatter(formatter)
    logger.addHandler(console)

    if Config.LOG_FILE:
        try:
            log_file = RotatingFileHandler(Config.LOG_FILE, maxBytes=5 * 1024 * 1024, backupCount=3, encoding="utf-8")
        except OSError:
            # console only
            logger.exception("Cannot open log file %s", Config.LOG_FILE)
        else:
            log_file.setFormatter(formatter)
            logger.addHandler(log_file)

    return logger
