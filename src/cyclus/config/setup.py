import logging
from logging import Logger
from typing import Optional, Union

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(
        name: Optional[str] = "cyclus",
        level: Union[int, str] = logging.INFO
) -> Logger:
    """
    Set up a logger with a single stream handler.

    Calling it again for the same logger only updates the level.

    :param name: Name for the logger. If None, returns root logger.
    :param level: Logging level, as a number or a level name.
    :return: Configured logger instance.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)

    for handler in logger.handlers:
        handler.setLevel(level)

    return logger
