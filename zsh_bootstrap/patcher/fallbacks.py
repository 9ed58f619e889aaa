"""Stratégies d'insertion d'une ligne de directive absente.

Quand aucune ligne ne correspond à l'ancre de la directive, le patcher
évalue une liste ordonnée de stratégies ; la première qui retourne une
position est appliquée.

Example:
    Insertion après ``ZSH_THEME=``, sinon en tête de fichier :

        fallbacks = [InsertAfterMatch(r"^\\s*ZSH_THEME="), Prepend()]
"""

import re
from abc import ABC, abstractmethod
from typing import Pattern, Sequence, Union

from zsh_bootstrap.patcher.lines import TextLines


def compile_pattern(pattern: Union[str, Pattern[str]]) -> Pattern[str]:
    """Compile un motif s'il ne l'est pas déjà."""
    if isinstance(pattern, str):
        return re.compile(pattern)
    return pattern


class InsertionStrategy(ABC):
    """Interface d'une stratégie d'insertion."""

    @abstractmethod
    def position(self, lines: TextLines) -> int | None:
        """Calcule l'index d'insertion de la nouvelle ligne.

        Args:
            lines: Contenu courant du fichier.

        Returns:
            Index d'insertion, ou None si la stratégie ne s'applique pas.
        """
        pass

    @abstractmethod
    def describe(self) -> str:
        """Description courte pour les logs."""
        pass


class InsertAfterMatch(InsertionStrategy):
    """Insère juste après la première ligne correspondant à un motif."""

    def __init__(self, pattern: Union[str, Pattern[str]]) -> None:
        self.pattern = compile_pattern(pattern)

    def position(self, lines: TextLines) -> int | None:
        index = lines.index_of(lambda line: self.pattern.search(line))
        return None if index is None else index + 1

    def describe(self) -> str:
        return f"after /{self.pattern.pattern}/"


class Prepend(InsertionStrategy):
    """Insère en tête de fichier. S'applique toujours."""

    def position(self, lines: TextLines) -> int | None:
        return 0

    def describe(self) -> str:
        return "start of file"


class Append(InsertionStrategy):
    """Insère en fin de fichier. S'applique toujours."""

    def position(self, lines: TextLines) -> int | None:
        return len(lines.lines)

    def describe(self) -> str:
        return "end of file"


def default_fallbacks(
    secondary_anchors: Sequence[str] = (r"^\s*ZSH_THEME=",),
) -> list[InsertionStrategy]:
    """Chaîne par défaut : après chaque ancre secondaire, puis en tête."""
    chain: list[InsertionStrategy] = [
        InsertAfterMatch(anchor) for anchor in secondary_anchors
    ]
    chain.append(Prepend())
    return chain


def resolve_insertion(
    lines: TextLines,
    fallbacks: Sequence[InsertionStrategy],
) -> tuple[int, InsertionStrategy] | None:
    """Évalue les stratégies dans l'ordre.

    Returns:
        (index, stratégie) de la première stratégie applicable, ou None.
    """
    for strategy in fallbacks:
        index = strategy.position(lines)
        if index is not None:
            return index, strategy
    return None
