"""Implémentation concrète du logger avec fichier."""

import logging
import os
from typing import Optional, TextIO

from zsh_bootstrap.logging.base import Logger
from zsh_bootstrap.logging.console_logger import build_console_handlers

DEFAULT_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


class FileLogger(Logger):
    """
    Logger qui écrit dans un fichier avec option console.

    Caractéristiques:
    - Logger unique par fichier (évite les conflits)
    - Encodage UTF-8 explicite
    - Flush immédiat après chaque log
    - Pas de propagation (évite les logs en double)
    - Sortie console optionnelle au format de l'installeur
      (``==>``, ``[WARN]``, ``[ERROR]``)
    """

    def __init__(
        self,
        log_file: str,
        level: str = "INFO",
        log_format: str = DEFAULT_FORMAT,
        console_output: bool = False,
        stdout: Optional[TextIO] = None,
        stderr: Optional[TextIO] = None,
        name: Optional[str] = None,
    ) -> None:
        """
        Initialise le logger.

        Args:
            log_file: Chemin du fichier de log
            level: Niveau minimal ("DEBUG", "INFO", ...)
            log_format: Format stdlib des lignes du fichier
            console_output: Activer la sortie console en plus du fichier
            stdout: Flux console des messages d'information
            stderr: Flux console des avertissements et erreurs
            name: Nom du logger stdlib (défaut: dérivé du fichier)
        """
        self.log_file = log_file

        log_dir = os.path.dirname(log_file)
        if log_dir and not os.path.exists(log_dir):
            os.makedirs(log_dir, exist_ok=True)

        log_level = getattr(logging, level.upper(), logging.INFO)

        self.logger = logging.getLogger(
            name or f"zsh_bootstrap.file.{log_file}"
        )
        self.logger.setLevel(log_level)

        # Éviter les handlers dupliqués
        if not self.logger.handlers:
            file_handler = logging.FileHandler(log_file, encoding="utf-8")
            file_handler.setLevel(log_level)
            file_handler.setFormatter(logging.Formatter(log_format))
            self.logger.addHandler(file_handler)
            self.handler = file_handler

            if console_output:
                for handler in build_console_handlers(
                    log_level, stdout, stderr
                ):
                    self.logger.addHandler(handler)
        else:
            self.handler = self.logger.handlers[0]

        self.logger.propagate = False

    def _flush(self) -> None:
        """Force l'écriture immédiate sur le disque."""
        if getattr(self, "handler", None):
            self.handler.flush()

    def log_info(self, message: str) -> None:
        self.logger.info(message)
        self._flush()

    def log_warning(self, message: str) -> None:
        self.logger.warning(message)
        self._flush()

    def log_error(self, message: str) -> None:
        self.logger.error(message)
        self._flush()

    def log_debug(self, message: str) -> None:
        self.logger.debug(message)
        self._flush()
