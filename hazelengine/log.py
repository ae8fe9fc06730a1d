"""Engine and client loggers writing to the console and a log file."""

from __future__ import annotations

import logging
import os
import sys

TRACE = 5
CORE_LOGGER_NAME = "HAZEL"
CLIENT_LOGGER_NAME = "APP"

logging.addLevelName(TRACE, "TRACE")

_CONSOLE_FORMAT = "[%(asctime)s] %(name)s: %(message)s"
_FILE_FORMAT = "[%(asctime)s] [%(levelname)s] %(name)s: %(message)s"
_TIME_FORMAT = "%H:%M:%S"


def init_logging(log_file: str | os.PathLike[str] = "Hazel.log") -> None:
    """Set up both loggers; the log file is truncated."""
    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(logging.Formatter(_CONSOLE_FORMAT, _TIME_FORMAT))
    file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
    file_handler.setFormatter(logging.Formatter(_FILE_FORMAT, _TIME_FORMAT))

    for name in (CORE_LOGGER_NAME, CLIENT_LOGGER_NAME):
        logger = logging.getLogger(name)
        for old in list(logger.handlers):
            logger.removeHandler(old)
            if old not in (console, file_handler):
                old.close()
        logger.addHandler(console)
        logger.addHandler(file_handler)
        logger.setLevel(TRACE)
        logger.propagate = False


def core_logger() -> logging.Logger:
    """The logger used by the engine itself."""
    return logging.getLogger(CORE_LOGGER_NAME)


def client_logger() -> logging.Logger:
    """The logger used by applications built on the engine."""
    return logging.getLogger(CLIENT_LOGGER_NAME)