"""Patcher idempotent de fichiers de configuration.

Garantit qu'un fichier contient une ligne de directive (remplacée ou
insérée) et un bloc marqué (ajouté une seule fois), puis vérifie
l'état final.
"""

from zsh_bootstrap.patcher.base import (
    BEGIN_MARKER,
    END_MARKER,
    BlockOutcome,
    ConfigPatcher,
    DirectiveOutcome,
    Expectation,
    MatchKind,
    PatcherConfig,
)
from zsh_bootstrap.patcher.fallbacks import (
    Append,
    InsertAfterMatch,
    InsertionStrategy,
    Prepend,
    default_fallbacks,
)
from zsh_bootstrap.patcher.lines import TextLines
from zsh_bootstrap.patcher.manager import LinuxConfigPatcher

__all__ = [
    # Configuration et structures
    "BEGIN_MARKER",
    "END_MARKER",
    "PatcherConfig",
    "MatchKind",
    "Expectation",
    "DirectiveOutcome",
    "BlockOutcome",
    "TextLines",
    # Stratégies d'insertion
    "InsertionStrategy",
    "InsertAfterMatch",
    "Prepend",
    "Append",
    "default_fallbacks",
    # Interface et implémentation
    "ConfigPatcher",
    "LinuxConfigPatcher",
]
