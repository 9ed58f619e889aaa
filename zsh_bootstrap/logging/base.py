"""Interface abstraite pour le logging."""

from abc import ABC, abstractmethod


class Logger(ABC):
    """Interface pour le système de logging.

    Les étapes d'installation, le patcher et les collaborateurs
    externes ne dépendent que de cette interface.
    """

    @abstractmethod
    def log_info(self, message: str) -> None:
        """Log un message d'information (étape en cours, résultat)."""
        pass

    @abstractmethod
    def log_warning(self, message: str) -> None:
        """Log un avertissement (étape non critique en échec)."""
        pass

    @abstractmethod
    def log_error(self, message: str) -> None:
        """Log une erreur fatale."""
        pass

    def log_debug(self, message: str) -> None:
        """Log un message de diagnostic. Ignoré par défaut."""
        return None
