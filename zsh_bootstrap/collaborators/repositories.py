"""Récupération des dépôts git des plugins."""

from abc import ABC, abstractmethod
from enum import StrEnum
from pathlib import Path

from zsh_bootstrap.commands.base import CommandExecutor
from zsh_bootstrap.commands.builder import CommandBuilder
from zsh_bootstrap.logging.base import Logger


class FetchStatus(StrEnum):
    """Résultat de clone_or_update."""

    CLONED = "cloned"
    UPDATED = "updated"
    SKIPPED = "skipped"
    WARNING = "warning"


class RepositoryFetcher(ABC):
    """Interface abstraite de récupération d'un dépôt."""

    @abstractmethod
    def clone_or_update(self, url: str, dest: Path) -> FetchStatus:
        """Clone le dépôt ou met à jour une copie existante.

        Les échecs ne lèvent pas d'exception : ils sont loggés et
        signalés par FetchStatus.WARNING ou SKIPPED.
        """
        pass


class GitRepositoryFetcher(RepositoryFetcher):
    """Clone superficiel (``--depth 1``) ou ``pull --ff-only``.

    - ``dest/.git`` présent : mise à jour en avance rapide ;
    - ``dest`` présent sans ``.git`` : ignoré, rien n'est écrasé ;
    - sinon : clone.
    """

    def __init__(self, executor: CommandExecutor, logger: Logger,
                 depth: int = 1) -> None:
        self._executor = executor
        self._logger = logger
        self._depth = depth

    def clone_or_update(self, url: str, dest: Path) -> FetchStatus:
        dest = Path(dest)

        if (dest / ".git").is_dir():
            self._logger.log_info(f"Updating plugin in {dest}")
            result = self._executor.run(
                ["git", "-C", str(dest), "pull", "--ff-only"]
            )
            if not result.success:
                self._logger.log_warning(
                    f"Could not update {dest} (continuing)"
                )
                return FetchStatus.WARNING
            return FetchStatus.UPDATED

        if dest.exists():
            self._logger.log_warning(
                f"Directory exists but is not a git repo: {dest} "
                "(skipping clone)"
            )
            return FetchStatus.SKIPPED

        self._logger.log_info(f"Cloning {url} -> {dest}")
        result = self._executor.run(
            CommandBuilder("git")
            .with_args(["clone"])
            .with_option("--depth", str(self._depth))
            .with_args([url, str(dest)])
            .build()
        )
        if not result.success:
            self._logger.log_warning(
                f"Could not clone {url}: {result.stderr.strip()} "
                "(continuing)"
            )
            return FetchStatus.WARNING
        return FetchStatus.CLONED
