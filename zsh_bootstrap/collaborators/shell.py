"""Changement du shell par défaut de l'utilisateur."""

from abc import ABC, abstractmethod
from enum import StrEnum

from zsh_bootstrap.commands.base import CommandExecutor
from zsh_bootstrap.errors.exceptions import FatalPrerequisiteMissing
from zsh_bootstrap.logging.base import Logger


class ShellSwitchStatus(StrEnum):
    """Résultat de set_default_shell."""

    CHANGED = "changed"
    ALREADY_SET = "already-set"
    FAILED = "failed"


class DefaultShellSwitcher(ABC):
    """Interface abstraite du changement de shell par défaut."""

    @abstractmethod
    def set_default_shell(self, path: str) -> ShellSwitchStatus:
        """Définit le shell par défaut. Un échec n'est qu'un
        avertissement : il est loggé et signalé par FAILED."""
        pass


class ChshShellSwitcher(DefaultShellSwitcher):
    """Changement de shell via chsh, puis sudo chsh en second essai.

    Attributes:
        current_shell: Shell courant (valeur de SHELL au lancement).
        user: Utilisateur dont le shell est modifié.
    """

    def __init__(
        self,
        executor: CommandExecutor,
        logger: Logger,
        current_shell: str = "",
        user: str = "",
    ) -> None:
        self._executor = executor
        self._logger = logger
        self.current_shell = current_shell
        self.user = user

    def set_default_shell(self, path: str) -> ShellSwitchStatus:
        if self.current_shell == path:
            self._logger.log_info(f"Default shell already set to {path}")
            return ShellSwitchStatus.ALREADY_SET

        self._logger.log_info(f"Attempting to set default shell to {path}")
        if self._executor.which("chsh") is None:
            self._logger.log_warning(
                "chsh not found; cannot set default shell automatically."
            )
            return ShellSwitchStatus.FAILED

        if self._executor.run(["chsh", "-s", path]).success:
            self._logger.log_info("Default shell changed for current user.")
            return ShellSwitchStatus.CHANGED

        self._logger.log_warning(
            "chsh without sudo failed; trying with sudo "
            "(may still fail if policy disallows)."
        )
        command = ["chsh", "-s", path]
        if self.user:
            command.append(self.user)
        try:
            changed = self._executor.run(command, privileged=True).success
        except FatalPrerequisiteMissing as e:
            self._logger.log_warning(str(e))
            changed = False

        if changed:
            self._logger.log_info("Default shell changed (via sudo).")
            return ShellSwitchStatus.CHANGED

        self._logger.log_warning(
            "Could not change default shell automatically. "
            f"You can run: chsh -s {path}"
        )
        return ShellSwitchStatus.FAILED
