"""
Logger implementation for magekit.

Wraps stdlib logging with configurable handlers for console (stderr) and file.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, ClassVar

from ..core.interfaces.logger import ILogger

# Keyword arguments understood by logging.Logger methods themselves
_LOGGING_KWARGS = frozenset({"exc_info", "stack_info", "stacklevel", "extra"})


def format_attributes(attrs: dict[str, Any]) -> str:
    """Render structured attributes as ``key=value`` pairs."""
    parts = []
    for key, value in attrs.items():
        if isinstance(value, float):
            value = f"{value:.2f}"
        elif isinstance(value, (list, tuple)):
            value = ",".join(str(v) for v in value)
        parts.append(f"{key}={value}")
    return " ".join(parts)


class MagekitLogger(ILogger):
    """
    Logger implementation using stdlib logging.

    Supports dual output to stderr and ~/.magekit/magekit.log.
    Extra keyword arguments are structured attributes: they are appended to
    the message as ``key=value`` pairs and attached to the record as
    ``record.attrs``.
    """

    LOG_FILE_PATH = Path.home() / ".magekit" / "magekit.log"
    MAX_FILE_SIZE = 10 * 1024 * 1024  # 10MB
    BACKUP_COUNT = 3

    LEVEL_MAP: ClassVar[dict[str, int]] = {
        "debug": logging.DEBUG,
        "info": logging.INFO,
        "warning": logging.WARNING,
        "error": logging.ERROR,
    }

    def __init__(
        self,
        name: str = "magekit",
        level: str = "info",
        console_enabled: bool = True,
        file_enabled: bool = False,
        log_file: Path | None = None,
    ) -> None:
        """
        Initialize logger.

        Args:
            name: Logger name
            level: Initial log level (debug, info, warning, error)
            console_enabled: Enable stderr output
            file_enabled: Enable rotating file output
            log_file: Override for the log file path
        """
        self._logger = logging.getLogger(name)
        self._logger.setLevel(logging.DEBUG)  # Let handlers filter
        self._logger.handlers.clear()
        self._logger.propagate = False

        self._console_handler: logging.Handler | None = None
        self._file_handler: logging.Handler | None = None
        self._log_file = log_file or self.LOG_FILE_PATH

        log_level = self.LEVEL_MAP.get(level.lower(), logging.INFO)

        if console_enabled:
            console = logging.StreamHandler(sys.stderr)
            console.setLevel(log_level)
            console.setFormatter(logging.Formatter("%(levelname)-7s %(message)s"))
            self._logger.addHandler(console)
            self._console_handler = console

        if file_enabled:
            self._setup_file_handler(log_level)

    def _setup_file_handler(self, level: int) -> None:
        """Set up rotating file handler."""
        self._log_file.parent.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            self._log_file,
            maxBytes=self.MAX_FILE_SIZE,
            backupCount=self.BACKUP_COUNT,
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        self._logger.addHandler(file_handler)
        self._file_handler = file_handler

    def _log(self, level: int, message: str, args: tuple, kwargs: dict[str, Any]) -> None:
        log_kwargs = {k: v for k, v in kwargs.items() if k in _LOGGING_KWARGS}
        attrs = {k: v for k, v in kwargs.items() if k not in _LOGGING_KWARGS}

        if attrs:
            suffix = format_attributes(attrs)
            if args:
                suffix = suffix.replace("%", "%%")
            message = f"{message} {suffix}"
            extra = dict(log_kwargs.get("extra") or {})
            extra["attrs"] = attrs
            log_kwargs["extra"] = extra

        self._logger.log(level, message, *args, **log_kwargs)

    def debug(self, message: str, *args: Any, **kwargs: Any) -> None:
        """Log a debug-level message."""
        self._log(logging.DEBUG, message, args, kwargs)

    def info(self, message: str, *args: Any, **kwargs: Any) -> None:
        """Log an info-level message."""
        self._log(logging.INFO, message, args, kwargs)

    def warning(self, message: str, *args: Any, **kwargs: Any) -> None:
        """Log a warning-level message."""
        self._log(logging.WARNING, message, args, kwargs)

    def error(self, message: str, *args: Any, **kwargs: Any) -> None:
        """Log an error-level message."""
        self._log(logging.ERROR, message, args, kwargs)

    def set_level(self, level: str) -> None:
        """Set log level for all handlers."""
        lvl = self.LEVEL_MAP.get(level.lower(), logging.INFO)
        if self._console_handler:
            self._console_handler.setLevel(lvl)
        if self._file_handler:
            self._file_handler.setLevel(lvl)


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
