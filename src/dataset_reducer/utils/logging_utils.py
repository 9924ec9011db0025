"""
Logging utilities for the dataset reducer.
Console output is colorized with colorlog; a plain-text file handler is optional.
"""

import logging
import os
import sys
from pathlib import Path
from typing import Optional
import colorlog

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

LOG_COLORS = {
    'DEBUG': 'cyan',
    'INFO': 'green',
    'WARNING': 'yellow',
    'ERROR': 'red',
    'CRITICAL': 'red,bg_white',
}


def setup_logger(
    name: str,
    log_file: Optional[str] = None,
    level: Optional[str] = None,
    colorize: bool = True
) -> logging.Logger:
    """
    Set up a logger with a console handler and an optional file handler.

    Args:
        name: Logger name (typically __name__ of the calling module)
        log_file: Path to log file (optional)
        level: Logging level name; falls back to $LOG_LEVEL, then INFO
        colorize: Whether to colorize console output

    Returns:
        Configured logger instance

    Example:
        >>> logger = setup_logger("dataset_reducer", log_file="logs/reducer.log")
        >>> logger.info("Reducing 12000 records")
    """
    level = (level or os.getenv('LOG_LEVEL') or 'INFO').upper()

    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, level, logging.INFO))

    # Handlers are rebuilt on every call so reconfiguration does not duplicate output
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    file_formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    if colorize:
        console_formatter = colorlog.ColoredFormatter(
            '%(log_color)s' + LOG_FORMAT,
            datefmt=DATE_FORMAT,
            log_colors=LOG_COLORS
        )
    else:
        console_formatter = file_formatter

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(console_formatter)
    logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_path)
        file_handler.setFormatter(file_formatter)
        logger.addHandler(file_handler)

    # Child loggers under the package root must not print twice
    logger.propagate = False

    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger for a module.

    Loggers inside the ``dataset_reducer`` package hand their records to the
    package root logger, which is configured once on first use. Any other name
    gets its own default handlers.

    Args:
        name: Logger name

    Returns:
        Logger instance

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.warning("No date column found, using stratified sampling")
    """
    root_name = 'dataset_reducer'

    if name == root_name or name.startswith(root_name + '.'):
        root = logging.getLogger(root_name)
        if not root.handlers:
            setup_logger(root_name)
        return logging.getLogger(name)

    logger = logging.getLogger(name)
    if not logger.handlers:
        logger = setup_logger(name)

    return logger
