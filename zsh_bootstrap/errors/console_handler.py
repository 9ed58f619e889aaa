"""
    ConsoleErrorHandler
"""
import sys

from zsh_bootstrap.errors.base import ErrorHandler
from zsh_bootstrap.errors.exceptions import (ApplicationError,
                                             ConfigurationError,
                                             FatalPrerequisiteMissing,
                                             InstallationError,
                                             PatchVerificationError,
                                             VerificationFailed,
                                             WriteError)


DEFAULT_SOLUTIONS: dict[type[Exception], str] = {
    FatalPrerequisiteMissing: (
        "Installez l'outil manquant (ex: apt install curl) "
        "puis relancez."
    ),
    ConfigurationError: "Vérifiez votre fichier de configuration.",
    InstallationError: "Consultez les logs pour plus de détails.",
    WriteError: "Vérifiez les permissions du fichier cible.",
    VerificationFailed: (
        "Le fichier a été modifié pendant l'exécution ? "
        "Relancez la commande, elle est idempotente."
    ),
    PatchVerificationError: (
        "Relancez la commande, elle est idempotente."
    ),
}


class ConsoleErrorHandler(ErrorHandler):
    """Handler pour afficher les erreurs sur la sortie d'erreur.

    Distingue les erreurs connues (ApplicationError) des erreurs
    inattendues, et affiche une solution adaptée au type d'erreur.
    La solution retenue est celle de la classe la plus proche dans
    la hiérarchie (ordre de résolution des méthodes).
    """

    def __init__(
        self,
        base_error_type: type[Exception] = ApplicationError,
        solutions: dict[type[Exception], str] | None = None,
        stream=None,
    ) -> None:
        """Initialise le handler console.

        Args:
            base_error_type: Classe de base des erreurs connues.
            solutions: Dictionnaire {TypeException: "message solution"}.
                Fusionné par-dessus DEFAULT_SOLUTIONS.
            stream: Flux de sortie (défaut: sys.stderr au moment de
                l'affichage).
        """
        self.base_error_type = base_error_type
        self.solutions = {**DEFAULT_SOLUTIONS, **(solutions or {})}
        self._stream = stream

    def _print(self, message: str) -> None:
        print(message, file=self._stream or sys.stderr)

    def handle(self, error: Exception) -> None:
        if isinstance(error, self.base_error_type):
            self._handle_known_error(error)
        else:
            self._handle_unknown_error(error)

    def solution_for(self, error: Exception) -> str:
        """Retourne la solution la plus spécifique pour une erreur.

        Args:
            error: L'exception concernée.

        Returns:
            Message de solution, ou un message générique.
        """
        for klass in type(error).__mro__:
            if klass in self.solutions:
                return self.solutions[klass]
        return "Voir les messages ci-dessus."

    def _handle_known_error(self, error: Exception) -> None:
        self._print(f"\n[ERROR] {type(error).__name__}: {error}")
        self._print(f"Solution : {self.solution_for(error)}")

    def _handle_unknown_error(self, error: Exception) -> None:
        self._print(f"\n[ERROR] Erreur inattendue: {error}")
        self._print(f"Type: {type(error).__name__}")
        self._print(
            "Cela peut être un bug. Veuillez ouvrir une issue "
            "avec ces informations."
        )
