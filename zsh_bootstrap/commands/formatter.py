"""Formateurs des messages de commandes système.

Classes :
    CommandFormatter : Interface abstraite de formatage.
    PlainCommandFormatter : Texte brut avec préfixes [ROOT]/[user].
    AnsiCommandFormatter : Codes ANSI colorés pour la console.

Note :
    AnsiCommandFormatter vérifie si la sortie est un terminal (TTY)
    avant d'émettre des codes ANSI.
"""

import shlex
import sys
from abc import ABC, abstractmethod
from typing import List


class CommandFormatter(ABC):
    """Interface abstraite pour formater les messages de commande."""

    @abstractmethod
    def format_start(self, command: List[str], is_root: bool) -> str:
        """Formate le message de début d'exécution."""
        pass

    @abstractmethod
    def format_dry_run(self, command: List[str], is_root: bool) -> str:
        """Formate le message de simulation (mode dry-run)."""
        pass

    def format_line(self, line: str, is_root: bool) -> str:
        """Formate une ligne de sortie en mode streaming."""
        return line


class PlainCommandFormatter(CommandFormatter):
    """Formateur texte brut pour les logs fichier.

    Example :
        [ROOT] Exécution : apt-get install -y zsh
        [user] [dry-run] git clone --depth 1 https://... /home/...
    """

    _ROOT_PREFIX = "[ROOT]"
    _USER_PREFIX = "[user]"

    def _prefix(self, is_root: bool) -> str:
        return self._ROOT_PREFIX if is_root else self._USER_PREFIX

    def format_start(self, command: List[str], is_root: bool) -> str:
        return f"{self._prefix(is_root)} Exécution : {shlex.join(command)}"

    def format_dry_run(self, command: List[str], is_root: bool) -> str:
        return f"{self._prefix(is_root)} [dry-run] {shlex.join(command)}"


class AnsiCommandFormatter(PlainCommandFormatter):
    """Formateur ANSI coloré pour la sortie console.

    Styles ANSI :
        ROOT    → \\033[1;33m (jaune-or gras)
        user    → \\033[0;32m (vert normal)
        dry-run → \\033[0;90m (gris discret)
    """

    RESET = "\033[0m"
    ROOT_STYLE = "\033[1;33m"
    USER_STYLE = "\033[0;32m"
    DRY_STYLE = "\033[0;90m"

    def _is_tty(self) -> bool:
        return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()

    def _style(self, text: str, style: str) -> str:
        if not self._is_tty():
            return text
        return f"{style}{text}{self.RESET}"

    def format_start(self, command: List[str], is_root: bool) -> str:
        style = self.ROOT_STYLE if is_root else self.USER_STYLE
        return self._style(super().format_start(command, is_root), style)

    def format_dry_run(self, command: List[str], is_root: bool) -> str:
        return self._style(
            super().format_dry_run(command, is_root), self.DRY_STYLE
        )
