"""
Structured Logging Framework

This module provides the logging setup using structlog on top of the stdlib
logging tree, with console output and an optional rotating JSON log file.
Library modules keep logging through logging.getLogger(__name__); their
records are rendered by the same formatters.
"""

import logging
import logging.handlers
import sys
import traceback
from pathlib import Path
from typing import List, Optional

import structlog

from ..config.schema import LoggingConfig


def _shared_processors() -> List:
    return [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
    ]


class StructuredLogger:
    """Structured logger using structlog with console and JSON file output."""

    def __init__(self, config: LoggingConfig):
        """Initialize structured logger.

        Args:
            config: Logging configuration
        """
        self.config = config
        self._configured = False
        self.handlers: List[logging.Handler] = []

    def configure(self) -> None:
        """Configure structlog and the root logger handlers."""
        if self._configured:
            return

        root_logger = logging.getLogger()
        root_logger.handlers.clear()

        log_level = getattr(logging, self.config.level.upper())
        root_logger.setLevel(log_level)

        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(log_level)
        console_handler.setFormatter(self._console_formatter())
        root_logger.addHandler(console_handler)
        self.handlers.append(console_handler)

        if self.config.file:
            file_handler = self._file_handler(log_level)
            root_logger.addHandler(file_handler)
            self.handlers.append(file_handler)

        structlog.configure(
            processors=[
                structlog.stdlib.filter_by_level,
                *_shared_processors(),
                structlog.processors.StackInfoRenderer(),
                structlog.processors.format_exc_info,
                structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
            ],
            wrapper_class=structlog.stdlib.BoundLogger,
            logger_factory=structlog.stdlib.LoggerFactory(),
            cache_logger_on_first_use=True,
        )

        self._configured = True

    def _console_formatter(self) -> logging.Formatter:
        """Human-readable console formatter."""
        if self.config.format == "simple":
            return logging.Formatter(
                fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )

        return structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=_shared_processors(),
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                structlog.dev.ConsoleRenderer(colors=False),
            ],
        )

    def _file_handler(self, log_level: int) -> logging.Handler:
        """Rotating file handler writing one JSON object per line."""
        log_path = Path(self.config.file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            filename=self.config.file,
            maxBytes=self.config.max_size_mb * 1024 * 1024,
            backupCount=self.config.backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(log_level)
        file_handler.setFormatter(
            structlog.stdlib.ProcessorFormatter(
                foreign_pre_chain=_shared_processors(),
                processors=[
                    structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                    structlog.processors.format_exc_info,
                    structlog.processors.JSONRenderer(),
                ],
            )
        )
        return file_handler

    def close(self) -> None:
        """Detach and close the handlers installed by configure()."""
        root_logger = logging.getLogger()
        for handler in self.handlers:
            root_logger.removeHandler(handler)
            handler.close()
        self.handlers.clear()
        self._configured = False

    def get_logger(self, name: str = "rdns_cache") -> structlog.stdlib.BoundLogger:
        """Get a structured logger instance."""
        if not self._configured:
            self.configure()

        return structlog.get_logger(name)


# Global logger instance
_logger_instance: Optional[StructuredLogger] = None


def setup_logging(config: LoggingConfig) -> StructuredLogger:
    """Setup global logging configuration.

    Args:
        config: Logging configuration
    """
    global _logger_instance
    if _logger_instance is not None:
        _logger_instance.close()
    _logger_instance = StructuredLogger(config)
    _logger_instance.configure()
    return _logger_instance


def get_logger(name: str = "rdns_cache") -> structlog.stdlib.BoundLogger:
    """Get a logger instance.

    Raises:
        RuntimeError: If logging hasn't been configured
    """
    if _logger_instance is None:
        raise RuntimeError("Logging not configured. Call setup_logging() first.")

    return _logger_instance.get_logger(name)


def log_exception(
    logger: structlog.stdlib.BoundLogger,
    message: str,
    exc: Optional[BaseException] = None,
) -> None:
    """Log an exception with detailed traceback information.

    Args:
        logger: Logger instance
        message: Log message
        exc: Exception instance (defaults to the one being handled)
    """
    if exc is None:
        exc = sys.exc_info()[1]

    if exc is None:
        logger.error(message)
        return

    logger.error(
        message,
        exception_type=type(exc).__name__,
        exception_message=str(exc),
        traceback="".join(
            traceback.format_exception(type(exc), exc, exc.__traceback__)
        ),
    )
