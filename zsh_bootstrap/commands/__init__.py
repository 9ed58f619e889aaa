"""Module d'exécution de commandes système.

Classes disponibles :
    CommandResult : Résultat immuable d'une exécution.
    CommandExecutor : Interface abstraite pour les exécuteurs.
    CommandBuilder : Constructeur fluent de commandes.
    LinuxCommandExecutor : Exécuteur concret via subprocess.
    CommandFormatter : Interface abstraite de formatage.
    PlainCommandFormatter : Formatage texte brut (logs fichier).
    AnsiCommandFormatter : Formatage ANSI coloré (console).
"""

from zsh_bootstrap.commands.base import (
    CommandResult,
    CommandExecutor,
)
from zsh_bootstrap.commands.builder import CommandBuilder
from zsh_bootstrap.commands.formatter import (
    CommandFormatter,
    PlainCommandFormatter,
    AnsiCommandFormatter,
)
from zsh_bootstrap.commands.runner import LinuxCommandExecutor

__all__ = [
    "CommandResult",
    "CommandExecutor",
    "CommandBuilder",
    "CommandFormatter",
    "PlainCommandFormatter",
    "AnsiCommandFormatter",
    "LinuxCommandExecutor",
]
