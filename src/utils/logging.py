"""
Logging setup for the NNTP client and its command-line tools.

Only the project's own loggers are reconfigured; the root logger is left to
whatever embeds the client.
"""

import logging
import sys
from typing import Optional, TextIO


PACKAGE_LOGGERS = ('src.nntp', 'src.tui')

DEFAULT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
PLAIN_FORMAT = '%(name)s - %(levelname)s - %(message)s'
DEBUG_FORMAT = '%(asctime)s - %(name)s:%(lineno)d - %(levelname)s - %(message)s'


def setup_logger(
    name: str,
    level: int = logging.INFO,
    format_string: Optional[str] = None,
    include_timestamp: bool = True,
    stream: Optional[TextIO] = None
) -> logging.Logger:
    """
    Set up a logger with a single stream handler.

    Args:
        name: Logger name
        level: Logging level
        format_string: Custom format string
        include_timestamp: Whether to include timestamp in logs
        stream: Output stream (defaults to stdout)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Reuse the handler of an already configured logger
    if logger.handlers:
        return logger

    if format_string is None:
        format_string = DEFAULT_FORMAT if include_timestamp else PLAIN_FORMAT

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(format_string))
    logger.addHandler(handler)

    return logger


def set_global_log_level(level: int) -> None:
    """Set the level of every package logger and of its handlers."""
    for logger_name in PACKAGE_LOGGERS:
        logger = logging.getLogger(logger_name)
        logger.setLevel(level)
        for handler in logger.handlers:
            handler.setLevel(level)


def configure_debug_logging() -> None:
    """Switch the package loggers to DEBUG with source line numbers."""
    set_global_log_level(logging.DEBUG)

    for logger_name in PACKAGE_LOGGERS:
        for handler in logging.getLogger(logger_name).handlers:
            handler.setFormatter(logging.Formatter(DEBUG_FORMAT))


def silence_external_loggers() -> None:
    """Silence noisy external library loggers."""
    logging.getLogger('rich').setLevel(logging.WARNING)
    logging.getLogger('asyncio').setLevel(logging.WARNING)


def configure_cli_logging(verbose: bool = False, stream: Optional[TextIO] = None) -> logging.Logger:
    """
    Logger for a command-line run.

    Warnings and errors go to the given stream (stderr by default) so that
    they never mix with article output. ``verbose`` turns on debug output.
    """
    logger = setup_logger('src.nntp', level=logging.WARNING, stream=stream or sys.stderr)
    silence_external_loggers()
    if verbose:
        configure_debug_logging()
    return logger
