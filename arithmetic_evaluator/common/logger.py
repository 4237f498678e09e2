"""Package-wide logger."""
import logging
import sys
from typing import Union


LOGGER_NAME = "arithmetic_evaluator"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def get_logger(name: str = LOGGER_NAME) -> logging.Logger:
    """
    Return the named logger, attaching a stderr handler on first use.

    :param str name: Logger name

    :return: Configured logger
    :rtype: logging.Logger
    """
    log = logging.getLogger(name)
    if not log.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        log.addHandler(handler)
        log.setLevel(logging.WARNING)
    return log


def set_level(level: Union[int, str]) -> None:
    """Change the verbosity of the package logger ("DEBUG", "INFO", ...)."""
    if isinstance(level, str):
        level = level.upper()
    logger.setLevel(level)


logger = get_logger()
