"""Module de gestion des fichiers."""

from zsh_bootstrap.filesystem.base import FileManager
from zsh_bootstrap.filesystem.linux import LinuxFileManager

__all__ = [
    "FileManager",
    "LinuxFileManager",
]
