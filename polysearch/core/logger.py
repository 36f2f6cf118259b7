"""
Logging setup for polysearch.

Handlers are attached to the ``polysearch`` package logger, not the root
logger, so an application embedding the library keeps control of its own
logging. Records still propagate to the root logger.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

PACKAGE_LOGGER = "polysearch"
LOG_FILE_NAME = "polysearch.log"

_logger_initialized = False


def setup_logging(
    log_level: str = "INFO",
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    logs_directory: Path = None,
    max_file_size_mb: int = 10,
    backup_count: int = 5,
    console: bool = True
) -> logging.Logger:
    """
    Configure the package logger once per process.

    Args:
        log_level: Level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
            Unknown names fall back to INFO.
        log_format: Format string shared by all handlers.
        logs_directory: Directory for the rotating log file. None disables
            file output.
        max_file_size_mb: Size at which the log file rotates.
        backup_count: Rotated files to keep.
        console: Whether to also log to stdout.

    Returns:
        The package logger.
    """
    global _logger_initialized

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    if _logger_initialized:
        return package_logger

    package_logger.setLevel(getattr(logging, str(log_level).upper(), logging.INFO))
    formatter = logging.Formatter(log_format)

    if console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        package_logger.addHandler(console_handler)

    if logs_directory:
        logs_directory = Path(logs_directory)
        logs_directory.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            logs_directory / LOG_FILE_NAME,
            maxBytes=max_file_size_mb * 1024 * 1024,
            backupCount=backup_count,
            encoding="utf-8"
        )
        file_handler.setFormatter(formatter)
        package_logger.addHandler(file_handler)

    _logger_initialized = True
    return package_logger


def teardown_logging() -> None:
    """Detach and close the package logger's handlers so setup can run again."""
    global _logger_initialized

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()

    _logger_initialized = False


def get_logger(name: str) -> logging.Logger:
    """
    Get a named logger, configuring the package logger on first use.

    Settings come from config.json; when no config can be loaded the
    defaults of setup_logging() apply.

    Args:
        name: Logger name, normally the calling module's __name__.

    Returns:
        Logger instance.
    """
    if not _logger_initialized:
        try:
            from .config_loader import get_config
            config = get_config()
            setup_logging(
                log_level=config.logging.level,
                log_format=config.logging.format,
                logs_directory=config.paths.logs_directory,
                max_file_size_mb=config.logging.max_file_size_mb,
                backup_count=config.logging.backup_count
            )
        except Exception:
            setup_logging()

    return logging.getLogger(name)
