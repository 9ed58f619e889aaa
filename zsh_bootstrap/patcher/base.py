"""Interfaces abstraites et structures de données du patcher.

Ce module définit :
- PatcherConfig : configuration explicite du patcher
- MatchKind / Expectation : attentes de la passe de vérification
- DirectiveOutcome / BlockOutcome : résultats des opérations
- ConfigPatcher : contrat du patcher idempotent
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path
from typing import Sequence

from zsh_bootstrap.patcher.fallbacks import InsertionStrategy

BEGIN_MARKER = "# --- added by setup script ---"
END_MARKER = "# --- end added by setup script ---"


@dataclass(frozen=True)
class PatcherConfig:
    """Configuration du patcher.

    Attributes:
        begin_marker: Commentaire ouvrant un bloc ajouté.
        end_marker: Commentaire fermant un bloc ajouté.
    """

    begin_marker: str = BEGIN_MARKER
    end_marker: str = END_MARKER


class MatchKind(StrEnum):
    """Nature d'une attente de vérification."""

    EXACT_LINE = "exact line"
    SUBSTRING = "substring"


@dataclass(frozen=True)
class Expectation:
    """Attente vérifiée sur le contenu du fichier.

    Attributes:
        pattern: Ligne exacte ou sous-chaîne attendue.
        kind: Nature de la correspondance.
    """

    pattern: str
    kind: MatchKind = MatchKind.SUBSTRING

    @classmethod
    def exact_line(cls, line: str) -> "Expectation":
        return cls(line, MatchKind.EXACT_LINE)

    @classmethod
    def substring(cls, text: str) -> "Expectation":
        return cls(text, MatchKind.SUBSTRING)


class DirectiveOutcome(StrEnum):
    """Résultat de ensure_directive_line."""

    REPLACED = "replaced"
    INSERTED = "inserted"
    UNCHANGED = "unchanged"


class BlockOutcome(StrEnum):
    """Résultat de ensure_marked_block."""

    APPENDED = "appended"
    ALREADY_PRESENT = "already present"


class ConfigPatcher(ABC):
    """Contrat d'un patcher de fichier de configuration idempotent."""

    @abstractmethod
    def ensure_directive_line(
        self,
        path: Path,
        anchor_pattern: str,
        desired_line: str,
        fallbacks: Sequence[InsertionStrategy] | None = None,
    ) -> DirectiveOutcome:
        """Garantit la présence de la ligne de directive.

        Args:
            path: Fichier cible (créé s'il est absent).
            anchor_pattern: Motif identifiant la directive canonique.
            desired_line: Contenu exact de la ligne attendue.
            fallbacks: Stratégies d'insertion si aucune ligne ne
                correspond à l'ancre.

        Returns:
            Le résultat de l'opération.

        Raises:
            PatchVerificationError: Si la ligne est absente après coup.
            WriteError: Si le fichier ne peut pas être écrit.
        """
        pass

    @abstractmethod
    def ensure_marked_block(
        self, path: Path, marker: str, block: str
    ) -> BlockOutcome:
        """Ajoute un bloc une seule fois, détecté par son marqueur.

        Args:
            path: Fichier cible (créé s'il est absent).
            marker: Sous-chaîne unique contenue dans le bloc.
            block: Texte complet du bloc.

        Returns:
            Le résultat de l'opération.

        Raises:
            ValueError: Si le bloc ne contient pas le marqueur.
            WriteError: Si le fichier ne peut pas être ouvert en ajout.
        """
        pass

    @abstractmethod
    def verify(
        self, path: Path, expectations: Sequence[Expectation]
    ) -> bool:
        """Relit le fichier et contrôle chaque attente dans l'ordre.

        Returns:
            True si toutes les attentes sont satisfaites.

        Raises:
            VerificationFailed: Pour la première attente en échec.
        """
        pass
