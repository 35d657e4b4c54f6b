"""Logging configuration for symtrace."""

import logging
import sys
from pathlib import Path
from typing import Any, Optional, Union, cast


class StructuredLogger(logging.Logger):
    """Logger that supports structured logging with fields."""

    def debug_with_fields(self, msg: str, **fields: Any) -> None:
        """Log a debug message with structured fields."""
        if fields:
            msg = f"{msg} {fields}"
        self.debug(msg)

    def info_with_fields(self, msg: str, **fields: Any) -> None:
        """Log a message with structured fields (at DEBUG level).

        Note: structured records stay at DEBUG so stderr only carries them
        with --verbose. Use regular info() for user-facing messages.
        """
        if fields:
            msg = f"{msg} {fields}"
        self.debug(msg)

    def warning_with_fields(self, msg: str, **fields: Any) -> None:
        """Log a warning message with structured fields."""
        if fields:
            msg = f"{msg} {fields}"
        self.warning(msg)

    def error_with_fields(self, msg: str, **fields: Any) -> None:
        """Log an error message with structured fields."""
        if fields:
            msg = f"{msg} {fields}"
        self.error(msg)


# Global logger instance
_logger_instance: Optional[StructuredLogger] = None


def get_logger() -> StructuredLogger:
    """Get or create the global logger instance.

    Handlers are only attached by setup_logging(); until then records
    propagate to the root logger.
    """
    global _logger_instance
    if _logger_instance is None:
        logger = logging.getLogger("symtrace")
        # Cast to StructuredLogger since we're changing its class
        logger.__class__ = StructuredLogger
        _logger_instance = cast(StructuredLogger, logger)
    return _logger_instance


def setup_logging(
    log_file: Optional[Union[str, Path]] = None, verbose: bool = False
) -> StructuredLogger:
    """Set up logging configuration.

    Args:
        log_file: Optional path to a log file receiving every record
        verbose: Whether to show debug records on stderr

    Returns:
        The configured logger instance
    """
    logger = get_logger()

    # Clear any existing handlers
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()

    stream_handler = logging.StreamHandler(sys.stderr)
    stream_handler.setLevel(logging.DEBUG if verbose else logging.INFO)
    stream_handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(stream_handler)

    if log_file:
        file_handler = logging.FileHandler(str(log_file), errors="backslashreplace")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )
        logger.addHandler(file_handler)

    # Set overall logger level to DEBUG to capture all messages
    logger.setLevel(logging.DEBUG)
    return logger
