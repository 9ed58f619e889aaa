"""Implémentation Linux de la gestion des fichiers texte."""

import os
import tempfile
from pathlib import Path

from zsh_bootstrap.errors.exceptions import WriteError
from zsh_bootstrap.filesystem.base import FileManager
from zsh_bootstrap.logging.base import Logger

# Octets non UTF-8 conservés tels quels à la relecture puis à l'écriture.
ENCODING_ERRORS = "surrogateescape"


class LinuxFileManager(FileManager):
    """
    Implémentation Linux de la gestion des fichiers texte.

    Les écritures complètes passent par un fichier temporaire dans le
    même répertoire puis un renommage atomique, en conservant les
    permissions du fichier d'origine. Toutes les opérations sont
    loggées via l'instance Logger.
    """

    def __init__(self, logger: Logger) -> None:
        self.logger = logger

    def file_exists(self, path: Path) -> bool:
        return Path(path).is_file()

    def ensure_exists(self, path: Path) -> bool:
        path = Path(path)
        if path.exists():
            return False
        self.logger.log_info(f"Creating missing {path}")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.touch()
        except OSError as e:
            self.logger.log_error(
                f"Erreur lors de la création du fichier {path}: {e}"
            )
            raise WriteError(path, str(e)) from e
        return True

    def read_text(self, path: Path) -> str:
        with open(path, "r", encoding="utf-8", errors=ENCODING_ERRORS,
                  newline="") as f:
            return f.read()

    def write_text(self, path: Path, content: str) -> None:
        """
        Remplace le contenu d'un fichier de manière atomique.

        Args:
            path: Chemin du fichier
            content: Nouveau contenu complet

        Raises:
            WriteError: Si l'écriture ou le renommage échoue
        """
        path = Path(path)
        tmp_name = None
        try:
            mode = path.stat().st_mode & 0o7777 if path.exists() else None
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{path.name}.", suffix=".tmp", dir=path.parent
            )
            with os.fdopen(fd, "w", encoding="utf-8",
                           errors=ENCODING_ERRORS, newline="") as f:
                f.write(content)
            if mode is not None:
                os.chmod(tmp_name, mode)
            os.replace(tmp_name, path)
        except OSError as e:
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            self.logger.log_error(
                f"Erreur lors de l'écriture du fichier {path}: {e}"
            )
            raise WriteError(path, str(e)) from e
        self.logger.log_debug(f"Fichier {path} réécrit.")

    def append_text(self, path: Path, content: str) -> None:
        try:
            with open(path, "a", encoding="utf-8",
                      errors=ENCODING_ERRORS, newline="") as f:
                f.write(content)
        except OSError as e:
            self.logger.log_error(
                f"Erreur lors de l'ajout dans le fichier {path}: {e}"
            )
            raise WriteError(path, str(e)) from e
        self.logger.log_debug(f"{len(content)} caractères ajoutés à {path}.")
