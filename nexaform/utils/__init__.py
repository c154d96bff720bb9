"""
NexaForm Utils Package
======================

Logging and value helpers.
"""

from __future__ import annotations

from nexaform.utils.helpers import FALSY_STRINGS, as_text, is_truthy
from nexaform.utils.logger import Logger, LogLevel, configure_logging, get_logger

__all__ = [
    # Logging
    "Logger",
    "LogLevel",
    "get_logger",
    "configure_logging",
    # Value helpers
    "FALSY_STRINGS",
    "as_text",
    "is_truthy",
]
