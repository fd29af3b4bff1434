"""Logging module for the proxy."""

from .setup import LOGGER_NAME, logger, setup_logging, truncate_for_log

__all__ = [
    "LOGGER_NAME",
    "logger",
    "setup_logging",
    "truncate_for_log",
]
