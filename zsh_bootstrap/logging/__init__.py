"""Module de logging."""

from zsh_bootstrap.logging.base import Logger
from zsh_bootstrap.logging.console_logger import ConsoleFormatter, ConsoleLogger
from zsh_bootstrap.logging.file_logger import FileLogger
from zsh_bootstrap.logging.change_logger import (
    ChangeEvent,
    ChangeEventType,
    ChangeLogger,
)

__all__ = [
    "Logger",
    "ConsoleFormatter",
    "ConsoleLogger",
    "FileLogger",
    "ChangeEvent",
    "ChangeEventType",
    "ChangeLogger",
]
