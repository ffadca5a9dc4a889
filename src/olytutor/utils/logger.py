"""Minimal logging utilities for olytutor.

Provides a simple get_logger function that wraps the standard library logging.

Example:
    >>> from olytutor.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Formatting message")
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Returns a standard library logger with the "olytutor." prefix.
    The library installs no handlers; applications configure output.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> logger = get_logger("mymodule")
        >>> logger.name
        'olytutor.mymodule'
    """
    if not (name == "olytutor" or name.startswith("olytutor.")):
        name = f"olytutor.{name}"
    return logging.getLogger(name)
