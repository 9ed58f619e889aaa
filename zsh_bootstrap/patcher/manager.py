"""Patcher idempotent de fichiers de configuration shell.

Ce module fournit LinuxConfigPatcher, qui garantit qu'un fichier texte
contient une ligne de directive et un bloc marqué, sans jamais
modifier le reste du contenu, puis vérifie l'état final.
"""

from pathlib import Path
from typing import Optional, Sequence

from zsh_bootstrap.errors.exceptions import (PatchVerificationError,
                                             VerificationFailed, WriteError)
from zsh_bootstrap.filesystem.base import FileManager
from zsh_bootstrap.logging.base import Logger
from zsh_bootstrap.logging.change_logger import ChangeEventType, ChangeLogger
from zsh_bootstrap.patcher.base import (
    BlockOutcome,
    ConfigPatcher,
    DirectiveOutcome,
    Expectation,
    MatchKind,
    PatcherConfig,
)
from zsh_bootstrap.patcher.fallbacks import (
    InsertionStrategy,
    compile_pattern,
    default_fallbacks,
    resolve_insertion,
)
from zsh_bootstrap.patcher.lines import TextLines, strip_cr


class LinuxConfigPatcher(ConfigPatcher):
    """Patcher de fichiers de configuration pour Linux.

    Compare le contenu courant au contenu cible et n'écrit que si une
    modification est nécessaire : relancer un patch déjà appliqué ne
    change rien au fichier.

    Attributes:
        logger: Instance de Logger pour tracer les opérations.
        file_manager: Accès au système de fichiers.
        config: Marqueurs des blocs ajoutés.
        changes: Journal structuré optionnel des modifications.

    Example:
        >>> patcher = LinuxConfigPatcher(logger, LinuxFileManager(logger))
        >>> patcher.ensure_directive_line(
        ...     Path.home() / ".zshrc", r"^\\s*plugins=", "plugins=(git)"
        ... )
        <DirectiveOutcome.INSERTED: 'inserted'>
    """

    def __init__(
        self,
        logger: Logger,
        file_manager: FileManager,
        config: Optional[PatcherConfig] = None,
        changes: Optional[ChangeLogger] = None,
    ) -> None:
        self.logger = logger
        self.file_manager = file_manager
        self.config = config or PatcherConfig()
        self.changes = changes

    def _record(self, event_type: ChangeEventType, path: Path,
                severity: str = "info", **details) -> None:
        if self.changes is not None:
            self.changes.record(event_type, path, severity, **details)

    def _read(self, path: Path) -> str:
        try:
            return self.file_manager.read_text(path)
        except OSError as e:
            self.logger.log_error(
                f"Erreur lors de la lecture du fichier {path}: {e}"
            )
            raise WriteError(path, str(e)) from e

    def _load(self, path: Path) -> str:
        """Lit le fichier cible en le créant s'il est absent."""
        if self.file_manager.ensure_exists(path):
            self._record(ChangeEventType.FILE_CREATED, path)
        return self._read(path)

    def ensure_directive_line(
        self,
        path: Path,
        anchor_pattern: str,
        desired_line: str,
        fallbacks: Sequence[InsertionStrategy] | None = None,
    ) -> DirectiveOutcome:
        """Remplace la première ligne correspondant à l'ancre, sinon
        insère la ligne via la première stratégie de repli applicable.

        Seule la première correspondance est remplacée, même si
        plusieurs lignes correspondent à l'ancre.
        """
        path = Path(path)
        anchor = compile_pattern(anchor_pattern)
        if fallbacks is None:
            fallbacks = default_fallbacks()

        self.logger.log_info(f"Ensuring {anchor.pattern} line in {path}")
        lines = TextLines.from_text(self._load(path))

        index = lines.index_of(lambda line: anchor.search(line))
        if index is not None:
            current = lines.lines[index]
            if strip_cr(current) == desired_line:
                outcome = DirectiveOutcome.UNCHANGED
            else:
                # La ligne remplacée garde sa fin de ligne CRLF.
                cr = "\r" if current.endswith("\r") else ""
                lines.lines[index] = desired_line + cr
                outcome = DirectiveOutcome.REPLACED
            details = {"line": index + 1}
        else:
            resolved = resolve_insertion(lines, fallbacks)
            if resolved is None:
                raise PatchVerificationError(
                    f"Aucune stratégie d'insertion applicable pour "
                    f"'{desired_line}' dans {path}"
                )
            index, strategy = resolved
            lines.lines.insert(index, desired_line)
            outcome = DirectiveOutcome.INSERTED
            details = {"line": index + 1, "strategy": strategy.describe()}

        if outcome is not DirectiveOutcome.UNCHANGED:
            self.file_manager.write_text(path, lines.to_text())
            self.logger.log_info(
                f"Directive {outcome} at line {details['line']} of {path}"
            )
        else:
            self.logger.log_info(f"Already present in {path}: {desired_line}")

        event = {
            DirectiveOutcome.REPLACED: ChangeEventType.DIRECTIVE_REPLACED,
            DirectiveOutcome.INSERTED: ChangeEventType.DIRECTIVE_INSERTED,
            DirectiveOutcome.UNCHANGED: ChangeEventType.DIRECTIVE_UNCHANGED,
        }[outcome]
        self._record(event, path, desired=desired_line, **details)

        if desired_line not in TextLines.from_text(self._read(path)):
            raise PatchVerificationError(
                f"Failed to set '{desired_line}' in {path}"
            )
        return outcome

    def ensure_marked_block(
        self, path: Path, marker: str, block: str
    ) -> BlockOutcome:
        """Ajoute le bloc en fin de fichier si le marqueur est absent.

        Le bloc est précédé d'une ligne vide et encadré par les
        commentaires de début et de fin de la configuration.
        """
        if marker not in block:
            raise ValueError(
                f"Le bloc ne contient pas son marqueur : {marker!r}"
            )
        path = Path(path)
        content = self._load(path)

        if marker in content:
            self.logger.log_info(f"Already present in {path}: {marker}")
            self._record(ChangeEventType.BLOCK_PRESENT, path, marker=marker)
            return BlockOutcome.ALREADY_PRESENT

        self.logger.log_info(f"Appending block to {path}: {marker}")
        separator = "\n" if content and not content.endswith("\n") else ""
        body = block if block.endswith("\n") else block + "\n"
        self.file_manager.append_text(
            path,
            f"{separator}\n"
            f"{self.config.begin_marker}\n"
            f"{body}"
            f"{self.config.end_marker}\n",
        )
        self._record(ChangeEventType.BLOCK_APPENDED, path, marker=marker)
        return BlockOutcome.APPENDED

    def verify(
        self, path: Path, expectations: Sequence[Expectation]
    ) -> bool:
        path = Path(path)
        self.logger.log_info(f"Verifying changes in {path}...")
        try:
            content = self.file_manager.read_text(path)
        except (OSError, UnicodeError) as e:
            first = expectations[0].pattern if expectations else str(path)
            self._record(ChangeEventType.VERIFICATION_FAILED, path,
                         severity="error", pattern=first, reason=str(e))
            raise VerificationFailed(first, path) from e

        lines = TextLines.from_text(content)
        for expectation in expectations:
            if expectation.kind is MatchKind.EXACT_LINE:
                satisfied = expectation.pattern in lines
            else:
                satisfied = expectation.pattern in content
            if not satisfied:
                self._record(ChangeEventType.VERIFICATION_FAILED, path,
                             severity="error", pattern=expectation.pattern,
                             kind=str(expectation.kind))
                raise VerificationFailed(expectation.pattern, path)

        self._record(ChangeEventType.VERIFICATION_PASSED, path,
                     checks=len(expectations))
        return True
