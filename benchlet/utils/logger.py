"""Centralized logging for benchlet.

Logging must be configured before use. Library entry points (the execution
context and the runner) call ``Logger.ensure_configured()`` so that embedding
code which never configures logging still gets a working, quiet logger.

Usage:
    from benchlet.utils.logger import Logger

    # Library code: configure from BENCHLET_LOG_LEVEL unless already set up
    Logger.ensure_configured()
    log = Logger.get("executor.SortBench")
    log.debug("before_each_run: reset")

    # Applications wanting full control configure explicitly instead
    Logger.configure(level="DEBUG", output="benchlet.log", timestamps=True)
"""

import logging
import sys
from enum import Enum
from pathlib import Path
from typing import TextIO


class LogLevel(Enum):
    """Log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

    def to_logging_level(self) -> int:
        """Convert to Python logging level."""
        level: int = getattr(logging, self.value)
        return level


class LoggerNotConfiguredError(Exception):
    """Raised when trying to use Logger before calling Logger.configure()."""

    def __init__(self) -> None:
        super().__init__(
            "Logger not configured. Call Logger.configure() before running benchmarks."
        )


class Logger:
    """Centralized logging for benchlet.

    Example:
        >>> Logger.configure(level="DEBUG", output="stderr")
        >>> Logger.get("runner").debug("3 classes queued")
    """

    _configured: bool = False
    _root_name: str = "benchlet"

    @classmethod
    def configure(
        cls,
        level: str | LogLevel = "INFO",
        output: str | Path | TextIO | None = None,
        timestamps: bool = True,
        include_location: bool = False,
        format_string: str | None = None,
    ) -> None:
        """Configure the logger.

        Args:
            level: Log level name or a LogLevel value.
            output: None for stdout, "stderr", a file path, or any
                file-like object.
            timestamps: Include timestamps in messages.
            include_location: Include [filename:lineno].
            format_string: Custom format string (overrides the two flags above).
        """
        if isinstance(level, str):
            level = LogLevel(level.upper())

        logger = logging.getLogger(cls._root_name)
        logger.setLevel(level.to_logging_level())

        for existing_handler in logger.handlers[:]:
            logger.removeHandler(existing_handler)
            existing_handler.close()

        new_handler: logging.Handler
        if output is None:
            new_handler = logging.StreamHandler(sys.stdout)
        elif output == "stderr":
            new_handler = logging.StreamHandler(sys.stderr)
        elif isinstance(output, str | Path):
            new_handler = logging.FileHandler(str(output))
        elif hasattr(output, "write"):
            new_handler = logging.StreamHandler(output)
        else:
            raise ValueError(f"Invalid output: {type(output)}")

        new_handler.setLevel(level.to_logging_level())

        if format_string is None:
            parts = []
            if timestamps:
                parts.append("%(asctime)s")
            parts.append("%(levelname)s")
            parts.append("[%(name)s]")
            if include_location:
                parts.append("[%(filename)s:%(lineno)d]")
            parts.append("%(message)s")
            format_string = " ".join(parts)

        new_handler.setFormatter(logging.Formatter(format_string))
        logger.addHandler(new_handler)
        logger.propagate = False

        cls._configured = True

    @classmethod
    def ensure_configured(cls, level: str | LogLevel | None = None) -> None:
        """Configure logging to stderr unless it is configured already.

        Args:
            level: Log level to use. Defaults to BENCHLET_LOG_LEVEL, then WARNING.
        """
        if cls._configured:
            return

        if level is None:
            from benchlet.utils.env import get_env

            level = get_env("BENCHLET_LOG_LEVEL", default="WARNING")

        cls.configure(level=level, output="stderr")

    @classmethod
    def get(cls, name: str | None = None) -> logging.Logger:
        """Get a logger instance.

        Args:
            name: Logger name (appended to "benchlet."). If None, returns
                the root benchlet logger.

        Raises:
            LoggerNotConfiguredError: If configure() hasn't been called.
        """
        if not cls._configured:
            raise LoggerNotConfiguredError()

        if name:
            return logging.getLogger(f"{cls._root_name}.{name}")
        return logging.getLogger(cls._root_name)

    @classmethod
    def set_level(cls, level: str | LogLevel) -> None:
        """Change log level without reconfiguring.

        Raises:
            LoggerNotConfiguredError: If configure() hasn't been called.
        """
        if not cls._configured:
            raise LoggerNotConfiguredError()

        if isinstance(level, str):
            level = LogLevel(level.upper())

        logger = logging.getLogger(cls._root_name)
        logger.setLevel(level.to_logging_level())
        for handler in logger.handlers:
            handler.setLevel(level.to_logging_level())

    @classmethod
    def is_configured(cls) -> bool:
        """Check if logger has been configured."""
        return cls._configured
