"""Utility modules for goteo.

Provides:
- logger: get_logger for namespaced logging
"""

from goteo.utils.logger import get_logger

__all__ = [
    "get_logger",
]
