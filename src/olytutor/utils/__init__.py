"""Utility modules for olytutor.

Provides:
- logger: get_logger for namespaced logging
"""

from olytutor.utils.logger import get_logger

__all__ = [
    "get_logger",
]
