"""
Logging utilities for the museum collection report.
Provides consistent logging across loader, summarizer and aggregator with
file and console handlers.
"""

import logging
import sys
from pathlib import Path
from typing import Optional
import colorlog

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def setup_logger(
    name: str,
    log_file: Optional[str] = None,
    level: str = "INFO",
    colorize: bool = True
) -> logging.Logger:
    """
    Set up a logger with both file and console handlers.

    Args:
        name: Logger name (typically __name__ of the calling module)
        log_file: Path to log file (optional)
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
        colorize: Whether to colorize console output

    Returns:
        Configured logger instance

    Example:
        >>> logger = setup_logger("museum_eda", log_file="logs/run.log")
        >>> logger.info("Loading collection: Cleveland")
    """
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, level.upper()))

    # Remove existing handlers to avoid duplicates
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    file_formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    if colorize:
        console_formatter = colorlog.ColoredFormatter(
            '%(log_color)s' + LOG_FORMAT,
            datefmt=DATE_FORMAT,
            log_colors={
                'DEBUG': 'cyan',
                'INFO': 'green',
                'WARNING': 'yellow',
                'ERROR': 'red',
                'CRITICAL': 'red,bg_white',
            }
        )
    else:
        console_formatter = file_formatter

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(console_formatter)
    logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(file_formatter)
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a module logger.

    Loggers inside the ``museum_eda`` package inherit the handlers installed
    on the package logger, so only loggers outside it get their own.

    Args:
        name: Logger name

    Returns:
        Logger instance

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.warning("Column 'Gender' is entirely empty")
    """
    logger = logging.getLogger(name)

    if name == 'museum_eda' or name.startswith('museum_eda.'):
        package_logger = logging.getLogger('museum_eda')
        if not package_logger.handlers:
            setup_logger('museum_eda')
        return logger

    if not logger.handlers:
        logger = setup_logger(name)

    return logger
