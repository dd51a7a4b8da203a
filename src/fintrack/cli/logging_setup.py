"""Logging configuration for the fintrack CLI."""

import logging


def setup_logging(level: str = "WARNING") -> logging.Logger:
    """Set up console logging for the ``fintrack`` logger namespace.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR)

    Returns:
        Configured logger instance.
    """
    logger = logging.getLogger("fintrack")
    logger.setLevel(level.upper())

    # Clear any existing handlers (in case this is called multiple times)
    logger.handlers.clear()

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level.upper())
    console_handler.setFormatter(logging.Formatter("%(levelname)s - %(message)s"))
    logger.addHandler(console_handler)

    return logger
