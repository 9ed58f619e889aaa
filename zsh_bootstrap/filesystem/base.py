"""Interface abstraite pour la gestion des fichiers texte."""

from abc import ABC, abstractmethod
from pathlib import Path


class FileManager(ABC):
    """Interface pour la lecture et l'écriture de fichiers texte."""

    @abstractmethod
    def file_exists(self, path: Path) -> bool:
        """
        Vérifie si un fichier existe.

        Args:
            path: Chemin du fichier

        Returns:
            True si le fichier existe, False sinon
        """
        pass

    @abstractmethod
    def ensure_exists(self, path: Path) -> bool:
        """
        Crée le fichier (vide) s'il est absent.

        Args:
            path: Chemin du fichier

        Returns:
            True si le fichier a été créé, False s'il existait déjà

        Raises:
            WriteError: Si la création échoue
        """
        pass

    @abstractmethod
    def read_text(self, path: Path) -> str:
        """
        Lit le contenu complet d'un fichier.

        Les octets qui ne sont pas de l'UTF-8 valide doivent être
        restitués à l'identique par write_text et append_text.

        Raises:
            FileNotFoundError: Si le fichier n'existe pas
        """
        pass

    @abstractmethod
    def write_text(self, path: Path, content: str) -> None:
        """
        Remplace le contenu d'un fichier.

        Raises:
            WriteError: Si l'écriture échoue
        """
        pass

    @abstractmethod
    def append_text(self, path: Path, content: str) -> None:
        """
        Ajoute du texte à la fin d'un fichier.

        Raises:
            WriteError: Si le fichier ne peut pas être ouvert en ajout
        """
        pass
