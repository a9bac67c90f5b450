"""Logging setup."""

from .logs import (
    DEFAULT_LOG_DATETIME,
    DEFAULT_LOG_FORMATTER,
    DEFAULT_LOG_LEVEL,
    DEFAULT_LOG_MAXBYTES,
    close_logging,
    prepare_log_path,
    remove_handlers,
    setup_logging,
)
