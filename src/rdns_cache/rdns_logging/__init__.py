"""
Reverse Cache Logging Module

Structured logging setup with console and JSON file output.
"""

from .logger import StructuredLogger, get_logger, log_exception, setup_logging

__all__ = [
    "StructuredLogger",
    "setup_logging",
    "get_logger",
    "log_exception",
]
