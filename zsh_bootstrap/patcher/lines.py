"""Découpage d'un texte en lignes avec restitution exacte.

``TextLines.from_text(t).to_text() == t`` pour tout texte utilisant
``\\n`` comme fin de ligne : la présence ou l'absence du saut de ligne
final est conservée.
"""

from dataclasses import dataclass, field


@dataclass
class TextLines:
    """Lignes d'un fichier texte, sans leurs fins de ligne.

    Attributes:
        lines: Lignes du fichier.
        trailing_newline: True si le texte se termine par ``\\n``.
            Un fichier vide est considéré comme terminé par un saut de
            ligne, pour que les lignes insérées le soient aussi.
    """

    lines: list[str] = field(default_factory=list)
    trailing_newline: bool = True

    @classmethod
    def from_text(cls, text: str) -> "TextLines":
        if text == "":
            return cls([], True)
        trailing = text.endswith("\n")
        body = text[:-1] if trailing else text
        return cls(body.split("\n"), trailing)

    def to_text(self) -> str:
        if not self.lines:
            return ""
        text = "\n".join(self.lines)
        return text + "\n" if self.trailing_newline else text

    def index_of(self, predicate) -> int | None:
        """Retourne l'index de la première ligne vérifiant le prédicat."""
        for index, line in enumerate(self.lines):
            if predicate(line):
                return index
        return None

    def __contains__(self, line: str) -> bool:
        return any(strip_cr(current) == line for current in self.lines)


def strip_cr(line: str) -> str:
    """Retire le ``\\r`` final d'une ligne issue d'un fichier CRLF."""
    return line[:-1] if line.endswith("\r") else line
