"""Blocs de code shell ajoutés au fichier de configuration.

Example:
    Bloc personnalisé :

        snippet = ShellSnippet(
            marker="mkcd() {",
            content='mkcd() {\\n  mkdir -p "$1" && cd "$1"\\n}',
        )
        patcher.ensure_marked_block(zshrc, snippet.marker, snippet.content)
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ShellSnippet:
    """Bloc de code shell identifié par un marqueur unique.

    Attributes:
        marker: Sous-chaîne utilisée pour détecter la présence du bloc.
        content: Texte complet du bloc.
        checks: Sous-chaînes supplémentaires contrôlées lors de la
            vérification finale (fonctions, alias...).
    """

    marker: str
    content: str
    checks: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        """Valide la cohérence du bloc.

        Raises:
            ValueError: Si le marqueur est vide ou absent du contenu,
                ou si une vérification est absente du contenu.
        """
        if not self.marker:
            raise ValueError("marker est requis")
        if self.marker not in self.content:
            raise ValueError(
                f"Le marqueur {self.marker!r} est absent du bloc"
            )
        for check in self.checks:
            if check not in self.content:
                raise ValueError(
                    f"La vérification {check!r} est absente du bloc"
                )

    def expected_substrings(self) -> list[str]:
        """Retourne le marqueur suivi des vérifications, sans doublon."""
        result = [self.marker]
        result.extend(c for c in self.checks if c != self.marker)
        return result
