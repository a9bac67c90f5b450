"""Utility functions for logging."""

from __future__ import annotations

import logging
import os
import sys
from logging.handlers import RotatingFileHandler

# Logging defaults
DEFAULT_LOG_LEVEL = logging.INFO
DEFAULT_LOG_FORMATTER = "%(asctime)s: %(levelname)s: %(module)s::%(funcName)s: %(message)s"
DEFAULT_LOG_DATETIME = "%y-%m-%d %H:%M:%S"
DEFAULT_LOG_MAXBYTES = int(2e6)  # 2MB
DEFAULT_LOG_DIR = ".logging"


def setup_logging(
    log_filename: str | None = None,
    max_bytes: int | None = None,
    log_level: int | None = None,
    delete_previous_logs: bool = False,
    log_stdout: bool = True,
    log_format_string: str | None = None,
    keep_previous_handlers: bool = False,
) -> None:
    r"""Set up logging for client generation and contract calls.

    Messages go to standard output, to a rotating log file, or both.

    Arguments
    ---------
    log_filename: str | None, optional
        Path and name of the log file. A bare name is placed in `.logging` under the working directory.
    max_bytes: int | None, optional
        Maximum size of the log file in bytes. Defaults to DEFAULT_LOG_MAXBYTES.
    log_level: int | None, optional
        Log level to track. Defaults to DEFAULT_LOG_LEVEL.
    delete_previous_logs: bool, optional
        Whether to delete the previous log file if it exists. Defaults to False.
    log_stdout: bool, optional
        Whether to log to standard output. Defaults to True.
    log_format_string: str | None, optional
        Logging format. Defaults to DEFAULT_LOG_FORMATTER.
    keep_previous_handlers: bool, optional
        Whether to keep the handlers already on the root logger. Defaults to False.
    """
    # pylint: disable=too-many-arguments
    root_logger = logging.getLogger()
    if not keep_previous_handlers:
        remove_handlers(root_logger)
    if log_level is None:
        log_level = DEFAULT_LOG_LEVEL
    formatter = logging.Formatter(log_format_string or DEFAULT_LOG_FORMATTER, DEFAULT_LOG_DATETIME)
    if log_stdout:
        stream_handler = logging.StreamHandler(sys.stdout)
        stream_handler.setLevel(log_level)
        stream_handler.setFormatter(formatter)
        root_logger.addHandler(stream_handler)
    if log_filename is not None:
        log_path = prepare_log_path(log_filename)
        if delete_previous_logs and os.path.exists(log_path):
            os.remove(log_path)
        file_handler = RotatingFileHandler(log_path, mode="w", maxBytes=max_bytes or DEFAULT_LOG_MAXBYTES)
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)
    # the root logger feeds every handler, so it tracks the lowest handler level
    if root_logger.handlers:
        root_logger.setLevel(min(handler.level for handler in root_logger.handlers))
    else:
        root_logger.setLevel(log_level)


def close_logging(delete_logs: bool = True) -> None:
    """Close logging and remove the handlers of the root logger.

    Arguments
    ---------
    delete_logs: bool, optional
        Whether to delete the log files of the file handlers. Defaults to True.
    """
    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        handler.close()
        if delete_logs and isinstance(handler, logging.FileHandler) and os.path.exists(handler.baseFilename):
            os.remove(handler.baseFilename)
    remove_handlers(root_logger)


def prepare_log_path(log_filename: str) -> str:
    """Append a ".log" extension if necessary and create the log directory.

    Arguments
    ---------
    log_filename: str
        Path and name of the log file.

    Returns
    -------
    str
        The full path of the log file.
    """
    log_dir, log_name = os.path.split(log_filename)
    if not log_name.endswith(".log"):
        log_name += ".log"
    if log_dir == "":
        log_dir = os.path.join(os.getcwd(), DEFAULT_LOG_DIR)
    os.makedirs(log_dir, exist_ok=True)
    return os.path.join(log_dir, log_name)


def remove_handlers(logger: logging.Logger) -> None:
    """Remove all handlers from the logger."""
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
