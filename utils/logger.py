"""
Logging utilities for the plotter command engine.
"""
import logging
import sys
from config import LOG_LEVEL, LOG_FILE

ROOT_LOGGER_NAME = "plotter_engine"

_logger = None


def setup_logger(level: str = None) -> logging.Logger:
    """Set up and return the application logger."""
    global _logger

    if _logger is not None:
        return _logger

    level = level or LOG_LEVEL
    log_level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(log_level)

    # Avoid duplicate handlers
    if logger.handlers:
        _logger = logger
        return logger

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_format = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )
    console_handler.setFormatter(console_format)
    logger.addHandler(console_handler)

    # File handler (disabled with LOG_FILE="")
    if LOG_FILE:
        try:
            file_handler = logging.FileHandler(LOG_FILE)
            file_handler.setLevel(log_level)
            file_format = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
            file_handler.setFormatter(file_format)
            logger.addHandler(file_handler)
        except OSError as e:
            logger.warning(f"Could not set up file logging: {e}")

    _logger = logger
    return logger


def get_logger(name: str = None) -> logging.Logger:
    """Get the application logger, or a named child of it."""
    logger = _logger or setup_logger()
    if name:
        return logger.getChild(name)
    return logger
