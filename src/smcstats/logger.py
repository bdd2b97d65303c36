"""
Logger configuration for smcstats.

This module configures the loguru logger for the package from the logging
settings, which can be populated from environment variables or a .env file.
By default warnings and above go to the console and nothing goes to a file.

Environment Variables:
    - SMCSTATS__LOGGING__DISABLED: Disable logging (default: false).
    - SMCSTATS__LOGGING__CLEAR_LOGGERS: Clear existing loggers from loguru
      (default: true).
    - SMCSTATS__LOGGING__CONSOLE_LOG_LEVEL: Log level for console logging
      (default: WARNING, options: DEBUG, INFO, WARNING, ERROR, CRITICAL).
    - SMCSTATS__LOGGING__LOG_FILE: Path to the log file for file logging
      (default: smcstats.log if log file level is set else none)
    - SMCSTATS__LOGGING__LOG_FILE_LEVEL: Log level for file logging
      (default: INFO if log file is set else none).

Usage:
    from smcstats import logger, configure_logger, LoggingSettings

    # Configure metrics with default settings
    configure_logger(
        config=LoggingSettings(
            disabled=False,
            clear_loggers=True,
            console_log_level="DEBUG",
            log_file=None,
            log_file_level=None,
        )
    )

    logger.debug("This is a debug message")
"""

from __future__ import annotations

import sys

from loguru import logger

from smcstats.settings import LoggingSettings, settings

__all__ = ["configure_logger", "logger"]


def configure_logger(config: LoggingSettings = settings.logging):
    """
    Configure the logger for smcstats.

    :param config: The configuration for the logger to use.
    """
    if config.disabled:
        logger.disable("smcstats")
        return

    logger.enable("smcstats")

    if config.clear_loggers:
        logger.remove()

    if config.console_log_level:
        logger.add(
            sys.stderr,
            level=config.console_log_level.upper(),
            format="<level>{level}</level> | {name}:{function}:{line} - {message}",
        )

    if config.log_file or config.log_file_level:
        log_file = config.log_file or "smcstats.log"
        log_file_level = config.log_file_level or "INFO"
        # log as json to the file for easier parsing
        logger.add(log_file, level=log_file_level.upper(), serialize=True)


configure_logger(config=settings.logging)
