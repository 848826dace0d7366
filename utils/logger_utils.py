from __future__ import annotations

import logging
import sys
from logging import Formatter, NullHandler, StreamHandler
from logging.handlers import RotatingFileHandler
from typing import TYPE_CHECKING, ClassVar, Final, Literal, NamedTuple, Self, TextIO, TypeAlias

if TYPE_CHECKING:
    from pathlib import Path

__all__: list[str] = ["LoggerUtils"]

LevelType: TypeAlias = Literal[
    "NOTSET",
    "DEBUG",
    "INFO",
    "WARNING",
    "ERROR",
    "CRITICAL",
]

_LOG_FILE_SIZE: Final[int] = 2 * 1024 * 1024  # 2MB
_LOG_BACKUP_COUNT: Final[int] = 2

DEFAULT_LOG_LEVEL: Final[int] = logging.INFO
DEFAULT_NAMESPACE: Final[str] = "I18nEngine"


class LogLevel(NamedTuple):
    """Logging level with both name and numeric value.

    Attributes:
        name (str): The name of the logging level (e.g., 'INFO', 'DEBUG').
        value (int): The numeric value of the logging level.
    """

    name: str
    value: int


class LoggerUtils:
    """Singleton that configures the translation engine's log output.

    Every module obtains its logger through ``get_logger(__name__)`` so all records share one namespace.
    Instantiating the class attaches the console handler and, optionally, a rotating log file.

    Attributes:
        _LOGGER_NAMESPACE (str): The namespace for the logger.
        _configured (bool): Indicates whether the logger has been configured.
        _instance (LoggerUtils | None): The singleton instance of LoggerUtils.
    """

    _LOGGER_NAMESPACE: ClassVar[str] = DEFAULT_NAMESPACE
    _configured: ClassVar[bool] = False
    _instance: ClassVar[Self | None] = None

    def __new__(cls, *args, **kwargs) -> Self:
        _ = args, kwargs
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self, filename: str | Path = "", *, use_null_console: bool = False) -> None:
        """Attach handlers to the namespace logger.

        If the logger is already configured, this method does nothing.

        Args:
            filename (str | Path): Absolute path of the log file. If empty, logging to a file is not performed.
            use_null_console (bool): If True, uses NullHandler instead of StreamHandler for console output.
        """
        if LoggerUtils._configured:
            return

        self.root_logger: logging.Logger = logging.getLogger(self._LOGGER_NAMESPACE)
        self._use_null_console: bool = bool(use_null_console) or sys.stderr is None
        filename = str(filename)
        # must be lower than the handler levels, otherwise nothing is emitted
        self.root_logger.setLevel(DEFAULT_LOG_LEVEL)

        self._console_logging()
        if filename.strip():
            self._file_logging(filename)
        else:
            self.root_logger.debug("Log file name is empty. Logging to the file is not performed.")

        LoggerUtils._configured = True

    def _console_logging(self) -> None:
        """Configure console output at WARNING level with a minimal format."""
        if self._use_null_console:
            if not self._has_handler(NullHandler):
                self.root_logger.addHandler(NullHandler())
            return

        if self._has_handler(StreamHandler):
            self.root_logger.warning("Console logging is already configured.")
            return

        console_handler: StreamHandler[TextIO] = StreamHandler(sys.stderr)
        console_handler.setLevel(logging.WARNING)
        console_handler.setFormatter(Formatter("[%(levelname)s] %(message)s"))
        self.root_logger.addHandler(console_handler)

    def _file_logging(self, filename: str) -> None:
        """Configure UTF-8 rotating file output at DEBUG level.

        Args:
            filename (str): Absolute path to the log file.
        """
        if self._has_handler(RotatingFileHandler):
            self.root_logger.warning("File logging is already configured.")
            return

        try:
            file_handler = RotatingFileHandler(
                filename=filename,
                maxBytes=_LOG_FILE_SIZE,
                backupCount=_LOG_BACKUP_COUNT,
                encoding="utf-8",
            )
        except (FileNotFoundError, PermissionError):
            self.root_logger.error("Incorrect log file name: %s\nLogging to the file is not performed.", filename)
            return

        file_handler.setLevel(logging.DEBUG)
        file_formatter = Formatter("%(asctime)s %(levelname)-8s %(lineno)4d %(name)-40s\t%(funcName)s\t%(message)s")
        file_handler.setFormatter(file_formatter)
        self.root_logger.addHandler(file_handler)

    def _has_handler(self, handler_type: type) -> bool:
        return any(isinstance(h, handler_type) for h in self.root_logger.handlers)

    @classmethod
    def set_level(cls, level: LevelType) -> None:
        """Set the logging level of the namespace logger.

        If an unknown level is specified, the logging level is set to 'INFO' and a warning is logged.

        Args:
            level (LevelType): The logging level to set.
        """
        root_logger: logging.Logger = logging.getLogger(cls._LOGGER_NAMESPACE)
        level_map: dict[str, int] = logging.getLevelNamesMapping()
        try:
            root_logger.setLevel(level_map[level.upper()])
        except KeyError:
            root_logger.setLevel(DEFAULT_LOG_LEVEL)
            root_logger.warning("Unknown logging level '%s' specified.\nLogging level set to 'INFO'.", level)

    @classmethod
    def set_debug(cls, *, enabled: bool) -> None:
        """Switch the namespace logger between DEBUG and the default level.

        Args:
            enabled (bool): True to log debug records.
        """
        cls.set_level("DEBUG" if enabled else "INFO")

    @classmethod
    def get_level(cls) -> LogLevel:
        """Get the effective logging level of the namespace logger."""
        level_value: int = logging.getLogger(cls._LOGGER_NAMESPACE).getEffectiveLevel()
        return LogLevel(name=logging.getLevelName(level_value), value=level_value)

    @staticmethod
    def get_logger(name: str | None = None) -> logging.Logger:
        """Get a logger under the engine namespace.

        Args:
            name (str | None): The module name. If None, the namespace root logger is returned.

        Returns:
            logging.Logger: The logger instance.
        """
        full_name: str | None
        if LoggerUtils._LOGGER_NAMESPACE:
            full_name = f"{LoggerUtils._LOGGER_NAMESPACE}.{name}" if name else LoggerUtils._LOGGER_NAMESPACE
        else:
            full_name = name or None
        return logging.getLogger(full_name)
