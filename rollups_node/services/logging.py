"""
Logger implementation for node diagnostics.

Wraps stdlib logging with two leveled streams: errors and warnings go
to stderr, info and debug go to stdout.
"""

import logging
import sys
from typing import Any, ClassVar, TextIO

from ..core.interfaces.logger import ILogger


class _PrefixFormatter(logging.Formatter):
    """Formatter that prints short level prefixes (ERROR, WARN, INFO, DEBUG)."""

    PREFIXES: ClassVar[dict[int, str]] = {
        logging.DEBUG: "DEBUG",
        logging.INFO: "INFO",
        logging.WARNING: "WARN",
        logging.ERROR: "ERROR",
        logging.CRITICAL: "ERROR",
    }

    def format(self, record: logging.LogRecord) -> str:
        record.prefix = self.PREFIXES.get(record.levelno, record.levelname)
        return super().format(record)


class _MaxLevelFilter(logging.Filter):
    """Only let records strictly below ``level`` through."""

    def __init__(self, level: int) -> None:
        super().__init__()
        self._level = level

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < self._level


class NodeLogger(ILogger):
    """
    Logger implementation using stdlib logging.

    The underlying logging.Logger is created standalone rather than
    through logging.getLogger(), so two NodeLogger instances never
    share handlers.
    """

    LEVEL_MAP: ClassVar[dict[str, int]] = {
        "debug": logging.DEBUG,
        "info": logging.INFO,
        "warn": logging.WARNING,
        "warning": logging.WARNING,
        "error": logging.ERROR,
    }

    def __init__(
        self,
        name: str = "rollups-node",
        level: str = "info",
        enable_timestamp: bool = False,
        stdout: TextIO | None = None,
        stderr: TextIO | None = None,
    ) -> None:
        """
        Initialize logger.

        Args:
            name: Logger name
            level: Initial log level (debug, info, warning, error)
            enable_timestamp: Prefix every line with date and time
            stdout: Stream for info/debug (default: sys.stdout)
            stderr: Stream for warning/error (default: sys.stderr)
        """
        self._logger = logging.Logger(name)
        self._logger.propagate = False
        self._enable_timestamp = enable_timestamp

        self._out_handler = logging.StreamHandler(sys.stdout if stdout is None else stdout)
        self._out_handler.addFilter(_MaxLevelFilter(logging.WARNING))
        self._err_handler = logging.StreamHandler(sys.stderr if stderr is None else stderr)
        self._err_handler.setLevel(logging.WARNING)

        self._logger.addHandler(self._out_handler)
        self._logger.addHandler(self._err_handler)
        self.set_level(level)

    def _build_formatter(self, level: int) -> logging.Formatter:
        fmt = "%(prefix)s "
        if self._enable_timestamp:
            fmt += "%(asctime)s "
        if level <= logging.DEBUG:
            fmt += "%(pathname)s:%(lineno)d: "
        fmt += "%(message)s"
        return _PrefixFormatter(fmt, datefmt="%Y/%m/%d %H:%M:%S")

    def debug(self, message: str, *args: Any, **kwargs: Any) -> None:
        """Log a debug-level message."""
        kwargs.setdefault("stacklevel", 2)
        self._logger.debug(message, *args, **kwargs)

    def info(self, message: str, *args: Any, **kwargs: Any) -> None:
        """Log an info-level message."""
        kwargs.setdefault("stacklevel", 2)
        self._logger.info(message, *args, **kwargs)

    def warning(self, message: str, *args: Any, **kwargs: Any) -> None:
        """Log a warning-level message."""
        kwargs.setdefault("stacklevel", 2)
        self._logger.warning(message, *args, **kwargs)

    def error(self, message: str, *args: Any, **kwargs: Any) -> None:
        """Log an error-level message."""
        kwargs.setdefault("stacklevel", 2)
        self._logger.error(message, *args, **kwargs)

    def set_level(self, level: str) -> None:
        """Set log level; unknown names fall back to info."""
        lvl = self.LEVEL_MAP.get(level.lower(), logging.INFO)
        self._logger.setLevel(lvl)
        formatter = self._build_formatter(lvl)
        self._out_handler.setFormatter(formatter)
        self._err_handler.setFormatter(formatter)


class NullLogger(ILogger):
    """No-op logger for testing or when logging is disabled."""

    def debug(self, message: str, *args: Any, **kwargs: Any) -> None:
        """No-op."""
        pass

    def info(self, message: str, *args: Any, **kwargs: Any) -> None:
        """No-op."""
        pass

    def warning(self, message: str, *args: Any, **kwargs: Any) -> None:
        """No-op."""
        pass

    def error(self, message: str, *args: Any, **kwargs: Any) -> None:
        """No-op."""
        pass

    def set_level(self, level: str) -> None:
        """No-op."""
        pass
