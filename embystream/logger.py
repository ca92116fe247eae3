"""Logging setup with domain-tagged messages and rotating log files."""

from __future__ import annotations

import dataclasses
import enum
import logging
import os
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import IO, Optional

DEFAULT_LOGGER_DOMAIN = "GENERAL"
CONFIG_LOGGER_DOMAIN = "CONFIG"
CRYPTO_LOGGER_DOMAIN = "CRYPTO"
CACHE_LOGGER_DOMAIN = "CACHE"

LOGGER_NAME = "embystream"
LEVEL_ENV_VAR = "EMBYSTREAM_LOG"

TRACE = 5
logging.addLevelName(TRACE, "TRACE")

_LEVEL_NAMES = {
    TRACE: "TRACE",
    logging.DEBUG: "DEBUG",
    logging.INFO: "INFO",
    logging.WARNING: "WARN",
    logging.ERROR: "ERROR",
}

_LEVEL_COLORS = {
    TRACE: "\x1b[35m",
    logging.DEBUG: "\x1b[34m",
    logging.INFO: "\x1b[32m",
    logging.WARNING: "\x1b[33m",
    logging.ERROR: "\x1b[31m",
}


class LogLevel(enum.IntEnum):
    """Severity of a log message, ordered from most to least severe."""

    ERROR = 1
    WARN = 2
    INFO = 3
    DEBUG = 4
    TRACE = 5

    def __str__(self) -> str:
        return self.name.capitalize()

    @property
    def logging_level(self) -> int:
        """The matching numeric level of the standard logging module."""
        return {
            LogLevel.ERROR: logging.ERROR,
            LogLevel.WARN: logging.WARNING,
            LogLevel.INFO: logging.INFO,
            LogLevel.DEBUG: logging.DEBUG,
            LogLevel.TRACE: TRACE,
        }[self]

    @classmethod
    def parse(cls, text: str) -> Optional["LogLevel"]:
        """Read a level name case-insensitively; None if it is not one."""
        name = text.strip().upper()
        if name == "WARNING":
            name = "WARN"
        return cls.__members__.get(name)


class _RollingFileHandler(logging.Handler):
    """Writes records to a file whose name carries the current UTC period."""

    def __init__(self, directory: str, prefix: str, rotation: "LogRotation") -> None:
        super().__init__()
        if rotation is LogRotation.NEVER and not prefix:
            raise ValueError("a log file prefix is required when files never rotate")
        self._directory = Path(directory)
        self._directory.mkdir(parents=True, exist_ok=True)
        self._prefix = prefix
        self._rotation = rotation
        self._path: Optional[Path] = None
        self._stream: Optional[IO[str]] = None

    def _file_name(self, when: datetime) -> str:
        pattern = self._rotation.date_pattern
        if pattern is None:
            return self._prefix
        date = when.strftime(pattern)
        return f"{self._prefix}.{date}" if self._prefix else date

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = self.format(record)
            when = datetime.fromtimestamp(record.created, timezone.utc)
            path = self._directory / self._file_name(when)
            if path != self._path or self._stream is None:
                self._close_stream()
                self._stream = path.open("a", encoding="utf-8")
                self._path = path
            self._stream.write(message + "\n")
            self._stream.flush()
        except Exception:
            self.handleError(record)

    def _close_stream(self) -> None:
        if self._stream is not None:
            self._stream.close()
            self._stream = None

    def close(self) -> None:
        self.acquire()
        try:
            self._close_stream()
        finally:
            self.release()
        super().close()


class LogRotation(enum.Enum):
    """How often log files start afresh."""

    MINUTELY = "%Y-%m-%d-%H-%M"
    HOURLY = "%Y-%m-%d-%H"
    DAILY = "%Y-%m-%d"
    NEVER = None

    @property
    def date_pattern(self) -> Optional[str]:
        return self.value

    def create_file_handler(self, directory: str, file_prefix: str) -> logging.Handler:
        """Create a handler writing to ``directory`` with this rotation."""
        return _RollingFileHandler(directory, file_prefix, self)


class _LineFormatter(logging.Formatter):
    """Formats records as: time LEVEL file:line: message."""

    def __init__(self, colored: bool) -> None:
        super().__init__()
        self._colored = colored

    def format(self, record: logging.LogRecord) -> str:
        stamp = datetime.fromtimestamp(record.created).strftime("%Y-%m-%d %H:%M:%S.%f")
        level = f"{_LEVEL_NAMES.get(record.levelno, record.levelname):>5}"
        if self._colored:
            color = _LEVEL_COLORS.get(record.levelno, "")
            level = f"{color}{level}\x1b[0m"
        text = f"{stamp} {level} {record.filename}:{record.lineno}: {record.getMessage()}"
        if record.exc_info:
            text = f"{text}\n{self.formatException(record.exc_info)}"
        return text


@dataclasses.dataclass(frozen=True)
class LoggerBuilder:
    """Configures file and console logging for the package."""

    max_level: LogLevel = LogLevel.INFO
    directory: str = "logs"
    file_name_prefix: str = ""
    rolling: LogRotation = LogRotation.DAILY

    def with_level(self, level: LogLevel) -> "LoggerBuilder":
        return dataclasses.replace(self, max_level=level)

    def with_directory(self, directory: str) -> "LoggerBuilder":
        return dataclasses.replace(self, directory=directory)

    def with_file_prefix(self, file_prefix: str) -> "LoggerBuilder":
        return dataclasses.replace(self, file_name_prefix=file_prefix)

    def with_rolling(self, rolling: LogRotation) -> "LoggerBuilder":
        return dataclasses.replace(self, rolling=rolling)

    def _effective_level(self) -> LogLevel:
        from_env = os.environ.get(LEVEL_ENV_VAR)
        if from_env:
            parsed = LogLevel.parse(from_env)
            if parsed is not None:
                return parsed
        return self.max_level

    def build(self) -> logging.Logger:
        """Install the configured handlers on the package logger and return it.

        The level may be overridden by the EMBYSTREAM_LOG environment variable.
        """
        logger = logging.getLogger(LOGGER_NAME)
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()

        logger.setLevel(self._effective_level().logging_level)
        logger.propagate = False

        file_handler = self.rolling.create_file_handler(self.directory, self.file_name_prefix)
        file_handler.setFormatter(_LineFormatter(colored=False))
        logger.addHandler(file_handler)

        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(_LineFormatter(colored=True))
        logger.addHandler(console_handler)
        return logger


def format_message(message: object, domain: str = DEFAULT_LOGGER_DOMAIN) -> str:
    """Tag a message with its domain: ``[DOMAIN] message``."""
    return f"[{domain}] {message}"


def _log(level: int, message: object, domain: str) -> None:
    logger = logging.getLogger(LOGGER_NAME)
    if logger.isEnabledFor(level):
        logger.log(level, "%s", format_message(message, domain), stacklevel=3)


def trace_log(message: object, domain: str = DEFAULT_LOGGER_DOMAIN) -> None:
    _log(TRACE, message, domain)


def debug_log(message: object, domain: str = DEFAULT_LOGGER_DOMAIN) -> None:
    _log(logging.DEBUG, message, domain)


def info_log(message: object, domain: str = DEFAULT_LOGGER_DOMAIN) -> None:
    _log(logging.INFO, message, domain)


def warn_log(message: object, domain: str = DEFAULT_LOGGER_DOMAIN) -> None:
    _log(logging.WARNING, message, domain)


def error_log(message: object, domain: str = DEFAULT_LOGGER_DOMAIN) -> None:
    _log(logging.ERROR, message, domain)