"""Installation d'Oh My Zsh via l'installeur officiel."""

from pathlib import Path

from zsh_bootstrap.commands.base import CommandExecutor
from zsh_bootstrap.errors.exceptions import (FatalPrerequisiteMissing,
                                             InstallationError)
from zsh_bootstrap.logging.base import Logger

# L'installeur ne doit ni lancer zsh, ni changer le shell, ni
# remplacer un ~/.zshrc existant : ces étapes sont gérées ici.
INSTALLER_ENV = {
    "RUNZSH": "no",
    "CHSH": "no",
    "KEEP_ZSHRC": "yes",
}


class OhMyZshInstaller:
    """Télécharge l'installeur officiel avec curl et l'exécute avec sh.

    Ne fait rien si le répertoire d'installation existe déjà.
    """

    def __init__(
        self,
        executor: CommandExecutor,
        logger: Logger,
        install_dir: Path,
        installer_url: str,
    ) -> None:
        self._executor = executor
        self._logger = logger
        self.install_dir = Path(install_dir)
        self.installer_url = installer_url

    def is_installed(self) -> bool:
        return self.install_dir.is_dir()

    def install(self) -> bool:
        """Installe Oh My Zsh si nécessaire.

        Returns:
            True si l'installeur a été exécuté, False s'il était
            déjà installé.

        Raises:
            FatalPrerequisiteMissing: Si curl est absent.
            InstallationError: Si le téléchargement ou l'installeur
                échoue.
        """
        if self.is_installed():
            self._logger.log_info(
                f"Oh My Zsh already installed at {self.install_dir}"
            )
            return False

        if self._executor.which("curl") is None:
            raise FatalPrerequisiteMissing(
                "curl is required but not found. "
                "Install it first (apt install curl)."
            )

        self._logger.log_info("Installing Oh My Zsh (official installer)...")
        download = self._executor.run(["curl", "-fsSL", self.installer_url])
        if not download.success:
            raise InstallationError(
                f"Could not download {self.installer_url}: "
                f"{download.stderr.strip()}"
            )

        result = self._executor.run_streaming(
            ["sh", "-c", download.stdout],
            env={**INSTALLER_ENV, "ZSH": str(self.install_dir)},
        )
        if not result.success:
            raise InstallationError(
                f"Oh My Zsh installer exited with code {result.return_code}"
            )
        return True
