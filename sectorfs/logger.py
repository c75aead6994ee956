"""
SectorFS Logger Module

Logging for the file system and its front ends:
- Subsystem-specific loggers under the ``sectorfs`` hierarchy
- Structured context attached to each record
- Optional console and file output
- In-memory buffer of recent records for diagnostics

Author: YSNRFD
Version: 1.0.0
"""

import logging
import sys
import threading
from collections import deque
from enum import IntEnum
from pathlib import Path
from typing import Any, Deque, List, Optional


class LogLevel(IntEnum):
    """Log level enumeration with numeric values for comparison."""
    DEBUG = 10
    INFO = 20
    NOTICE = 25
    WARNING = 30
    ERROR = 40
    CRITICAL = 50


logging.addLevelName(LogLevel.NOTICE, 'NOTICE')


class LogFormatter(logging.Formatter):
    """
    Formats records as ``[time] LEVEL [subsystem] message {key=value}``.

    The level is colour coded when writing to a terminal.
    """

    COLORS = {
        'DEBUG': '\033[36m',
        'INFO': '\033[32m',
        'NOTICE': '\033[34m',
        'WARNING': '\033[33m',
        'ERROR': '\033[31m',
        'CRITICAL': '\033[35m',
    }
    RESET = '\033[0m'

    def __init__(self, use_colors: bool = True):
        super().__init__(datefmt='%Y-%m-%d %H:%M:%S')
        self.use_colors = use_colors and getattr(sys.stdout, 'isatty', lambda: False)()

    def _level(self, levelname: str) -> str:
        padded = f"{levelname:8s}"
        color = self.COLORS.get(levelname) if self.use_colors else None
        return f"{color}{padded}{self.RESET}" if color else padded

    def format(self, record: logging.LogRecord) -> str:
        parts = [
            f"[{self.formatTime(record, self.datefmt)}.{int(record.msecs):03d}]",
            self._level(record.levelname),
        ]

        subsystem = getattr(record, 'subsystem', None)
        if subsystem:
            parts.append(f"[{subsystem}]")

        parts.append(record.getMessage())

        context = getattr(record, 'context', None)
        if context:
            pairs = " ".join(f"{key}={value}" for key, value in context.items())
            parts.append(f"{{{pairs}}}")

        line = " ".join(parts)
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


class MemoryLogHandler(logging.Handler):
    """
    Keeps the most recent records in memory.

    The shell and the tests read them back through
    ``Logger.get_recent_logs``.
    """

    def __init__(self, max_entries: int = 1000):
        super().__init__()
        self._entries: Deque[dict[str, Any]] = deque(maxlen=max_entries)

    def emit(self, record: logging.LogRecord) -> None:
        entry = {
            'timestamp': record.created,
            'level': record.levelname,
            'message': record.getMessage(),
            'subsystem': getattr(record, 'subsystem', None),
            'context': dict(getattr(record, 'context', None) or {}),
        }
        with self.lock:
            self._entries.append(entry)

    def get_logs(
        self,
        level: Optional[str] = None,
        subsystem: Optional[str] = None,
        limit: int = 100
    ) -> List[dict[str, Any]]:
        """Retrieve buffered records with optional filtering."""
        with self.lock:
            entries = list(self._entries)

        selected = [
            entry for entry in entries
            if (level is None or entry['level'] == level)
            and (subsystem is None or entry['subsystem'] == subsystem)
        ]
        return selected[-limit:]


class Logger:
    """
    Subsystem logger for SectorFS.

    One instance exists per subsystem name; all of them log through
    the standard library logger ``sectorfs.<subsystem>``.

    Example:
        >>> log = Logger('index')
        >>> log.debug("Appended record", context={'path': '/a.txt', 'sector': '0'})
    """

    _instances: dict[str, 'Logger'] = {}
    _lock = threading.Lock()
    _initialized = False
    _memory_handler: Optional[MemoryLogHandler] = None
    _global_level: int = LogLevel.INFO

    def __new__(cls, subsystem: str = 'vfs') -> 'Logger':
        with cls._lock:
            if subsystem not in cls._instances:
                instance = super().__new__(cls)
                instance._subsystem = subsystem
                instance._logger = logging.getLogger(f'sectorfs.{subsystem}')
                cls._instances[subsystem] = instance
            return cls._instances[subsystem]

    @classmethod
    def initialize(
        cls,
        level: int = LogLevel.INFO,
        log_file: Optional[str] = None,
        use_colors: bool = True,
        console_output: bool = True
    ) -> None:
        """
        Initialize the logging system.

        Only the first call has an effect until ``shutdown`` is called.

        Args:
            level: Minimum log level to capture
            log_file: Optional file path for log output
            use_colors: Whether to use ANSI colors in console output
            console_output: Whether to log to stdout at all
        """
        with cls._lock:
            if cls._initialized:
                return

            cls._global_level = level

            cls._memory_handler = MemoryLogHandler()
            cls._memory_handler.setLevel(level)

            root_logger = logging.getLogger('sectorfs')
            root_logger.setLevel(level)
            root_logger.addHandler(cls._memory_handler)

            if console_output:
                console_handler = logging.StreamHandler(sys.stdout)
                console_handler.setLevel(level)
                console_handler.setFormatter(LogFormatter(use_colors=use_colors))
                root_logger.addHandler(console_handler)

            if log_file:
                file_path = Path(log_file)
                file_path.parent.mkdir(parents=True, exist_ok=True)
                file_handler = logging.FileHandler(log_file, encoding='utf-8')
                file_handler.setLevel(level)
                file_handler.setFormatter(LogFormatter(use_colors=False))
                root_logger.addHandler(file_handler)

            cls._initialized = True

    @classmethod
    def shutdown(cls) -> None:
        """Detach and close every handler installed by ``initialize``."""
        with cls._lock:
            root_logger = logging.getLogger('sectorfs')
            for handler in list(root_logger.handlers):
                root_logger.removeHandler(handler)
                handler.close()
            cls._memory_handler = None
            cls._initialized = False

    @classmethod
    def get_recent_logs(
        cls,
        level: Optional[str] = None,
        subsystem: Optional[str] = None,
        limit: int = 100
    ) -> List[dict[str, Any]]:
        """Get records from the in-memory buffer."""
        if cls._memory_handler is None:
            return []
        return cls._memory_handler.get_logs(level=level, subsystem=subsystem, limit=limit)

    def _log(
        self,
        level: int,
        message: str,
        context: Optional[dict[str, Any]] = None,
        exc_info: Any = None
    ) -> None:
        self._logger.log(
            level,
            message,
            exc_info=exc_info,
            extra={'subsystem': self._subsystem, 'context': context or {}}
        )

    def debug(self, message: str, context: Optional[dict[str, Any]] = None) -> None:
        self._log(LogLevel.DEBUG, message, context)

    def info(self, message: str, context: Optional[dict[str, Any]] = None) -> None:
        self._log(LogLevel.INFO, message, context)

    def notice(self, message: str, context: Optional[dict[str, Any]] = None) -> None:
        self._log(LogLevel.NOTICE, message, context)

    def warning(self, message: str, context: Optional[dict[str, Any]] = None) -> None:
        self._log(LogLevel.WARNING, message, context)

    def error(self, message: str, context: Optional[dict[str, Any]] = None) -> None:
        self._log(LogLevel.ERROR, message, context)

    def critical(self, message: str, context: Optional[dict[str, Any]] = None) -> None:
        self._log(LogLevel.CRITICAL, message, context)

    def exception(
        self,
        message: str,
        exc: Optional[BaseException] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        """Log an exception with stack trace."""
        self._log(LogLevel.ERROR, message, context, exc_info=exc if exc is not None else True)


def parse_level(name: str) -> LogLevel:
    """
    Map a level name such as ``"debug"`` to a ``LogLevel``.

    Raises:
        KeyError: If the name is not a known level
    """
    return LogLevel[name.strip().upper()]


def get_logger(subsystem: str) -> Logger:
    """
    Get a logger for the specified subsystem.

    Args:
        subsystem: Name of the subsystem (e.g., 'index', 'vfs', 'shell')

    Returns:
        Logger instance for the subsystem
    """
    return Logger(subsystem)
