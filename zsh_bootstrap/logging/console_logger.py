"""Logger console reproduisant le format de l'installeur shell.

Les messages d'information sont écrits sur stdout sous la forme
``==> message``, les avertissements et erreurs sur stderr sous la forme
``[WARN] message`` et ``[ERROR] message``, chacun précédé d'une ligne
vide.
"""

import logging
import sys
from typing import Optional, TextIO

from zsh_bootstrap.logging.base import Logger


class ConsoleFormatter(logging.Formatter):
    """Formatter qui préfixe chaque message selon son niveau."""

    PREFIXES = {
        logging.DEBUG: "[debug]",
        logging.INFO: "==>",
        logging.WARNING: "[WARN]",
        logging.ERROR: "[ERROR]",
        logging.CRITICAL: "[ERROR]",
    }

    def format(self, record: logging.LogRecord) -> str:
        prefix = self.PREFIXES.get(record.levelno, "==>")
        return f"\n{prefix} {record.getMessage()}"


class _MaxLevelFilter(logging.Filter):
    """Laisse passer les records strictement sous un niveau donné."""

    def __init__(self, level: int) -> None:
        super().__init__()
        self.level = level

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < self.level


def build_console_handlers(
    level: int,
    stdout: Optional[TextIO] = None,
    stderr: Optional[TextIO] = None,
) -> list[logging.Handler]:
    """Construit la paire de handlers stdout/stderr.

    Args:
        level: Niveau minimal des messages.
        stdout: Flux des messages d'information (défaut: sys.stdout).
        stderr: Flux des avertissements et erreurs (défaut: sys.stderr).

    Returns:
        Liste [handler_stdout, handler_stderr].
    """
    formatter = ConsoleFormatter()

    out_handler = logging.StreamHandler(stdout or sys.stdout)
    out_handler.setLevel(level)
    out_handler.addFilter(_MaxLevelFilter(logging.WARNING))
    out_handler.setFormatter(formatter)

    err_handler = logging.StreamHandler(stderr or sys.stderr)
    err_handler.setLevel(max(level, logging.WARNING))
    err_handler.setFormatter(formatter)

    return [out_handler, err_handler]


class ConsoleLogger(Logger):
    """Logger console uniquement, sans fichier.

    Utilisé quand aucun fichier de log n'est configuré.
    """

    def __init__(
        self,
        name: str = "zsh_bootstrap.console",
        level: str = "INFO",
        stdout: Optional[TextIO] = None,
        stderr: Optional[TextIO] = None,
    ) -> None:
        """Initialise le logger.

        Args:
            name: Nom du logger stdlib sous-jacent.
            level: Niveau minimal ("DEBUG", "INFO", ...).
            stdout: Flux des messages d'information.
            stderr: Flux des avertissements et erreurs.
        """
        log_level = getattr(logging, level.upper(), logging.INFO)
        self.logger = logging.getLogger(name)
        self.logger.setLevel(log_level)
        for handler in list(self.logger.handlers):
            self.logger.removeHandler(handler)
        for handler in build_console_handlers(log_level, stdout, stderr):
            self.logger.addHandler(handler)
        self.logger.propagate = False

    def log_info(self, message: str) -> None:
        self.logger.info(message)

    def log_warning(self, message: str) -> None:
        self.logger.warning(message)

    def log_error(self, message: str) -> None:
        self.logger.error(message)

    def log_debug(self, message: str) -> None:
        self.logger.debug(message)
