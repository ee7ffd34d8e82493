"""Logging utilities for steamchat modules."""

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger that inherits from the root logger.

    Loggers work with basicConfig() without an explicit setup_logging()
    call. The logger will:
    - Propagate to the root logger
    - Only set a default level if the root logger has no handlers

    Args:
        name: Logger name (typically 'steamchat.<area>')

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.propagate = True

    # basicConfig() not called yet
    root_logger = logging.getLogger()
    if not root_logger.handlers:
        logger.setLevel(logging.WARNING)

    return logger
