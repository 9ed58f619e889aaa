"""
Exceptions personnalisées de zsh_bootstrap.

Chaque étape de l'installation décide, à l'endroit de l'appel, si une
erreur est fatale (arrêt immédiat, code de sortie non nul) ou si elle
est rétrogradée en avertissement.
"""


class ApplicationError(Exception):
    """Exception de base pour toute l'application."""
    pass


class ConfigurationError(ApplicationError):
    """Configuration invalide ou illisible."""
    pass


class SystemRequirementError(ApplicationError):
    """Exception de base pour les prérequis système."""
    pass


class MissingDependencyError(SystemRequirementError):
    """Exception de base pour les dépendances manquantes."""
    pass


class FatalPrerequisiteMissing(MissingDependencyError):
    """Outil requis absent (zsh, git, curl, sudo...). Arrêt immédiat."""
    pass


class InstallationError(ApplicationError):
    """Échec d'une installation requise (ex: Oh My Zsh)."""
    pass


class OptionalStepFailed(ApplicationError):
    """Étape optionnelle en échec. Loggée en avertissement."""
    pass


class ExternalCollaboratorWarning(ApplicationError):
    """Échec d'un clone, d'une mise à jour ou du changement de shell."""
    pass


class WriteError(ApplicationError):
    """Le fichier cible ne peut pas être écrit."""

    def __init__(self, path, reason: str = "") -> None:
        self.path = path
        message = f"Impossible d'écrire dans {path}"
        if reason:
            message = f"{message} : {reason}"
        super().__init__(message)


class PatchVerificationError(ApplicationError):
    """Le fichier n'est pas dans l'état final garanti après un patch."""
    pass


class VerificationFailed(PatchVerificationError):
    """Une attente de vérification n'est pas satisfaite.

    Attributes:
        pattern: Motif de la première attente en échec.
    """

    def __init__(self, pattern: str, path=None) -> None:
        self.pattern = pattern
        self.path = path
        where = f" dans {path}" if path is not None else ""
        super().__init__(f"Attente non satisfaite{where} : {pattern}")
