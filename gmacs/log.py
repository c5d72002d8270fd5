"""File logging for the editor with a process-wide default logger."""

from __future__ import annotations

import sys
from datetime import datetime
from enum import IntEnum
from pathlib import Path
from typing import IO, Any


class Level(IntEnum):
    """Severity levels, lowest first."""

    DEBUG = 0
    INFO = 1
    WARN = 2
    ERROR = 3

    def __str__(self) -> str:
        return self.name


class LogError(OSError):
    """The log directory or file could not be set up."""


class Logger:
    """Writes timestamped lines to a fresh file in a log directory."""

    def __init__(self, log_dir: str | Path = "logs") -> None:
        directory = Path(log_dir)
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise LogError(f"failed to create log directory: {exc}") from exc
        stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        self.path = directory / f"gmacs_{stamp}.log"
        try:
            self._file: IO[str] | None = open(self.path, "a", encoding="utf-8")
        except OSError as exc:
            raise LogError(f"failed to open log file: {exc}") from exc
        self.level = Level.DEBUG

    def __enter__(self) -> Logger:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def set_level(self, level: Level) -> None:
        self.level = Level(level)

    def _log(self, level: Level, message: str, args: tuple[Any, ...]) -> None:
        if level < self.level or self._file is None:
            return
        text = message % args if args else message
        stamp = datetime.now().strftime("%Y/%m/%d %H:%M:%S.%f")
        self._file.write(f"{stamp} [{level}] {text}\n")
        self._file.flush()

    def debug(self, message: str, *args: Any) -> None:
        self._log(Level.DEBUG, message, args)

    def info(self, message: str, *args: Any) -> None:
        self._log(Level.INFO, message, args)

    def warn(self, message: str, *args: Any) -> None:
        self._log(Level.WARN, message, args)

    def error(self, message: str, *args: Any) -> None:
        self._log(Level.ERROR, message, args)

    def close(self) -> None:
        """Close the log file; later calls do nothing."""
        if self._file is not None:
            self._file.close()
            self._file = None

    def writer(self) -> IO[str]:
        """The stream log lines go to, or stderr once closed."""
        return self._file if self._file is not None else sys.stderr


_global_logger: Logger | None = None


def init(log_dir: str | Path = "logs") -> Logger:
    """Create the default logger and return it."""
    global _global_logger
    _global_logger = Logger(log_dir)
    return _global_logger


def debug(message: str, *args: Any) -> None:
    if _global_logger is not None:
        _global_logger.debug(message, *args)


def info(message: str, *args: Any) -> None:
    if _global_logger is not None:
        _global_logger.info(message, *args)


def warn(message: str, *args: Any) -> None:
    if _global_logger is not None:
        _global_logger.warn(message, *args)


def error(message: str, *args: Any) -> None:
    if _global_logger is not None:
        _global_logger.error(message, *args)


def set_level(level: Level) -> None:
    if _global_logger is not None:
        _global_logger.set_level(level)


def close() -> None:
    if _global_logger is not None:
        _global_logger.close()