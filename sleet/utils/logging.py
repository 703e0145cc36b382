"""Gives out a production-ready logger.

This module provides:
- setup_logging: a function to assign package logging to a rotating file handler
"""

import logging
import os
from logging.handlers import RotatingFileHandler


def setup_logging(logger: logging.Logger, debug: bool = False, log_path: str = "logs/sleet.log"):
    """Sets logging of a logger to a .log file and std stream.

    Args:
        logger (logging.Logger): The logger to configure, usually the ``sleet`` one
        debug (bool): Whether to log at DEBUG level instead of INFO
        log_path (str): Where to write the rotating log file. Empty disables the file
    """

    log_level = logging.DEBUG if debug else logging.INFO

    for handler in logger.handlers:
        handler.close()
    logger.handlers = []

    if log_path:
        log_dir = os.path.dirname(log_path)
        if log_dir and not os.path.exists(log_dir):
            os.makedirs(log_dir)

        file_handler = RotatingFileHandler(log_path, maxBytes=10_000_000, backupCount=5)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]")
        )
        file_handler.setLevel(log_level)
        logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s: %(message)s"))
    console_handler.setLevel(log_level)

    logger.addHandler(console_handler)
    logger.setLevel(log_level)
