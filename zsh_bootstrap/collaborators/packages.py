"""Installation de paquets système.

Ce module fournit AptPackageInstaller, qui n'installe que les paquets
absents d'un système Debian/Ubuntu.

Example:
    >>> installer = AptPackageInstaller(executor, logger)
    >>> installer.ensure_installed(["zsh", "git", "curl"])
    {'zsh': True, 'git': True, 'curl': True}
"""

from abc import ABC, abstractmethod
from typing import Iterable

from zsh_bootstrap.commands.base import CommandExecutor
from zsh_bootstrap.commands.builder import CommandBuilder
from zsh_bootstrap.logging.base import Logger

INSTALLED_STATUS = "install ok installed"


class PackageInstaller(ABC):
    """Interface abstraite d'un gestionnaire de paquets."""

    @abstractmethod
    def is_installed(self, name: str) -> bool:
        """Indique si un paquet est installé."""
        pass

    @abstractmethod
    def ensure_installed(self, names: Iterable[str]) -> dict[str, bool]:
        """Installe les paquets manquants.

        Args:
            names: Noms des paquets (les doublons sont ignorés).

        Returns:
            Dictionnaire {nom: True si installé à l'issue de l'appel}.

        Raises:
            FatalPrerequisiteMissing: Si les privilèges requis ne
                peuvent pas être obtenus (sudo absent).
        """
        pass


class AptPackageInstaller(PackageInstaller):
    """Installateur de paquets via apt-get et dpkg-query.

    Les paquets sont d'abord vérifiés un par un avec dpkg-query ;
    seuls les manquants sont installés, après un apt-get update.
    Si dpkg-query est indisponible, tous les paquets sont installés.
    """

    def __init__(self, executor: CommandExecutor, logger: Logger) -> None:
        self._executor = executor
        self._logger = logger

    def is_installed(self, name: str) -> bool:
        result = self._executor.run(
            CommandBuilder("dpkg-query")
            .with_flag("-W")
            .with_flag("-f=${Status}")
            .with_args([name])
            .build()
        )
        return result.success and INSTALLED_STATUS in result.stdout

    def _update_and_install(self, names: list[str]) -> bool:
        update = self._executor.run_streaming(
            ["apt-get", "update", "-y"], privileged=True
        )
        if not update.success:
            self._logger.log_warning(
                "apt-get update failed; trying to install anyway."
            )
        install = self._executor.run_streaming(
            CommandBuilder("apt-get")
            .with_args(["install"])
            .with_flag("-y")
            .with_args(names)
            .build(),
            privileged=True,
        )
        return install.success

    def ensure_installed(self, names: Iterable[str]) -> dict[str, bool]:
        wanted = list(dict.fromkeys(names))
        if not wanted:
            return {}

        if self._executor.which("dpkg-query") is None:
            self._logger.log_warning(
                "dpkg-query not found; skipping package-installed "
                "checks and attempting install."
            )
            ok = self._update_and_install(wanted)
            return {name: ok for name in wanted}

        missing = [name for name in wanted if not self.is_installed(name)]
        if not missing:
            self._logger.log_info(
                f"All packages already installed: {' '.join(wanted)}"
            )
            return {name: True for name in wanted}

        self._logger.log_info(f"Installing packages: {' '.join(missing)}")
        if self._update_and_install(missing):
            return {name: True for name in wanted}

        # apt-get s'arrête au premier paquet introuvable : on relit l'état
        return {
            name: name not in missing or self.is_installed(name)
            for name in wanted
        }
