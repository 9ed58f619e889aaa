"""Constructeur fluent pour assembler des commandes système.

Example:
    Construction d'un clone superficiel :

        from zsh_bootstrap.commands import CommandBuilder

        cmd = (
            CommandBuilder("git")
            .with_args(["clone"])
            .with_option("--depth", "1")
            .with_args([url, dest])
            .build()
        )
        # Résultat : ["git", "clone", "--depth", "1", url, dest]
"""

from typing import List, Optional


class CommandBuilder:
    """Constructeur fluent pour assembler des commandes système.

    Les éléments sont conservés dans l'ordre d'ajout, ce qui permet
    d'intercaler sous-commandes, options et arguments.
    """

    def __init__(self, program: str) -> None:
        """Initialise le constructeur avec le programme.

        Raises:
            ValueError: Si program est vide.
        """
        if not program or not program.strip():
            raise ValueError("Le programme est requis.")
        self._parts: List[str] = [program]

    def with_flag(self, flag: str) -> "CommandBuilder":
        """Ajoute un flag simple (ex: '-y')."""
        self._parts.append(flag)
        return self

    def with_flag_if(self, flag: str, condition: bool) -> "CommandBuilder":
        """Ajoute un flag seulement si la condition est vraie."""
        if condition:
            self._parts.append(flag)
        return self

    def with_option(self, key: str, value: str) -> "CommandBuilder":
        """Ajoute une option suivie de sa valeur en argument séparé.

        Produit ['--depth', '1'] pour with_option('--depth', '1').
        """
        self._parts.extend([key, value])
        return self

    def with_option_if(
        self,
        key: str,
        value: Optional[str],
        condition: bool = True,
    ) -> "CommandBuilder":
        """Ajoute une option seulement si la condition est vraie
        et que la valeur n'est pas None."""
        if condition and value is not None:
            self._parts.extend([key, value])
        return self

    def with_args(self, args: List[str]) -> "CommandBuilder":
        """Ajoute des arguments positionnels."""
        self._parts.extend(args)
        return self

    def build(self) -> List[str]:
        """Retourne une copie de la commande sous forme de liste."""
        return list(self._parts)
