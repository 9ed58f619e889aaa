"""Exécuteur de commandes Linux via subprocess.

Ce module fournit LinuxCommandExecutor, une implémentation concrète
de CommandExecutor qui utilise subprocess pour exécuter des commandes
sur un système Linux.

Les commandes exécutées par root sont distinguées des commandes
utilisateur dans les logs ([ROOT] ou [user]). Les commandes marquées
``privileged`` sont préfixées par sudo quand le processus n'est pas
root.

Example :
    Installation d'un paquet en mode simulation :

        from zsh_bootstrap.commands import LinuxCommandExecutor

        executor = LinuxCommandExecutor(logger=logger, dry_run=True)
        result = executor.run(
            ["apt-get", "install", "-y", "zsh"], privileged=True
        )
        print(result.command)  # ['sudo', 'apt-get', ...] si non root
"""

import os
import shutil
import subprocess  # nosec B404
import time
from typing import Dict, List, Optional

from zsh_bootstrap.commands.base import CommandExecutor, CommandResult
from zsh_bootstrap.commands.formatter import (
    CommandFormatter,
    PlainCommandFormatter,
)
from zsh_bootstrap.errors.exceptions import FatalPrerequisiteMissing
from zsh_bootstrap.logging.base import Logger


class LinuxCommandExecutor(CommandExecutor):
    """Exécuteur de commandes Linux via subprocess.

    Supporte l'exécution avec capture de sortie et le streaming
    en temps réel. Le mode dry_run simule l'exécution sans lancer
    de processus et retourne un succès.

    Attributes:
        _logger: Logger optionnel pour les logs.
        _default_env: Variables d'environnement par défaut.
        _default_timeout: Timeout par défaut en secondes.
        _dry_run: Mode simulation.
        _is_root: True si le processus courant est root (uid 0).
        _plain: Formateur texte brut pour les logs.
        _console_formatter: Formateur optionnel pour la console.
    """

    def __init__(
        self,
        logger: Optional[Logger] = None,
        default_env: Optional[Dict[str, str]] = None,
        default_timeout: Optional[int] = None,
        dry_run: bool = False,
        console_formatter: Optional[CommandFormatter] = None,
    ) -> None:
        """Initialise l'exécuteur de commandes.

        Args:
            logger: Logger optionnel.
            default_env: Variables d'environnement par défaut
                (fusionnées avec os.environ).
            default_timeout: Timeout par défaut en secondes.
            dry_run: Si True, simule sans exécuter.
            console_formatter: Formateur optionnel pour afficher les
                commandes et la sortie streaming sur stdout.
        """
        self._logger = logger
        self._default_env = default_env
        self._default_timeout = default_timeout
        self._dry_run = dry_run
        self._is_root: bool = os.geteuid() == 0
        self._plain = PlainCommandFormatter()
        self._console_formatter = console_formatter

    @property
    def dry_run(self) -> bool:
        return self._dry_run

    @property
    def is_root(self) -> bool:
        return self._is_root

    def which(self, program: str) -> Optional[str]:
        return shutil.which(program)

    def _elevate(self, command: List[str], privileged: bool) -> List[str]:
        """Préfixe la commande par sudo si nécessaire.

        Raises:
            FatalPrerequisiteMissing: Si sudo est requis mais absent.
        """
        if not privileged or self._is_root:
            return list(command)
        if self.which("sudo") is None:
            raise FatalPrerequisiteMissing(
                f"sudo is required for: {' '.join(command)} "
                "(but sudo is not installed). "
                "Run as root or install sudo."
            )
        return ["sudo"] + list(command)

    def _build_env(
        self,
        env: Optional[Dict[str, str]] = None,
    ) -> Optional[Dict[str, str]]:
        """Fusionne os.environ, default_env et env spécifique.

        Retourne None si aucun environnement personnalisé
        (subprocess utilisera os.environ).
        """
        if self._default_env is None and env is None:
            return None
        merged = os.environ.copy()
        if self._default_env:
            merged.update(self._default_env)
        if env:
            merged.update(env)
        return merged

    def _resolve_timeout(self, timeout: Optional[int]) -> Optional[int]:
        return timeout if timeout is not None else self._default_timeout

    def _log(self, message: str) -> None:
        if self._logger:
            self._logger.log_debug(message)

    def _log_error(self, message: str) -> None:
        if self._logger:
            self._logger.log_warning(message)

    def _announce(self, command: List[str], dry: bool) -> None:
        """Trace le lancement d'une commande (log + console)."""
        if dry:
            self._log(self._plain.format_dry_run(command, self._is_root))
            if self._console_formatter:
                print(self._console_formatter.format_dry_run(
                    command, self._is_root
                ))
        else:
            self._log(self._plain.format_start(command, self._is_root))
            if self._console_formatter:
                print(self._console_formatter.format_start(
                    command, self._is_root
                ))

    def _result(
        self,
        command: List[str],
        return_code: int,
        stdout: str,
        stderr: str,
        duration: float,
    ) -> CommandResult:
        if return_code != 0:
            self._log_error(
                f"Code retour {return_code} : {' '.join(command)}"
            )
        return CommandResult(
            command=command,
            return_code=return_code,
            stdout=stdout,
            stderr=stderr,
            success=return_code == 0,
            duration=duration,
            executed_as_root=self._is_root,
        )

    def run(
        self,
        command: List[str],
        env: Optional[Dict[str, str]] = None,
        cwd: Optional[str] = None,
        timeout: Optional[int] = None,
        privileged: bool = False,
    ) -> CommandResult:
        """Exécute une commande et capture stdout et stderr.

        Un timeout ou une erreur système (programme introuvable...)
        produisent un résultat en échec avec return_code=-1.
        """
        command = self._elevate(command, privileged)
        self._announce(command, self._dry_run)
        if self._dry_run:
            return self._result(command, 0, "", "", 0.0)

        effective_timeout = self._resolve_timeout(timeout)
        start = time.monotonic()
        try:
            proc = subprocess.run(  # nosec B603
                command,
                capture_output=True,
                text=True,
                env=self._build_env(env),
                cwd=cwd,
                timeout=effective_timeout,
            )
        except subprocess.TimeoutExpired as e:
            self._log_error(
                f"Timeout après {effective_timeout}s : {' '.join(command)}"
            )
            return self._result(
                command, -1, _text(e.stdout), _text(e.stderr),
                time.monotonic() - start,
            )
        except OSError as e:
            self._log_error(f"Erreur système : {e}")
            return self._result(
                command, -1, "", str(e), time.monotonic() - start
            )
        return self._result(
            command, proc.returncode, proc.stdout, proc.stderr,
            time.monotonic() - start,
        )

    def run_streaming(
        self,
        command: List[str],
        env: Optional[Dict[str, str]] = None,
        cwd: Optional[str] = None,
        timeout: Optional[int] = None,
        privileged: bool = False,
    ) -> CommandResult:
        """Exécute avec sortie en temps réel.

        stderr est fusionné dans stdout ; chaque ligne est loggée
        et, si un console_formatter est configuré, affichée.
        """
        command = self._elevate(command, privileged)
        self._announce(command, self._dry_run)
        if self._dry_run:
            return self._result(command, 0, "", "", 0.0)

        effective_timeout = self._resolve_timeout(timeout)
        start = time.monotonic()
        stdout_lines: List[str] = []
        try:
            with subprocess.Popen(  # nosec B603
                command,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                env=self._build_env(env),
                cwd=cwd,
            ) as proc:
                for line in proc.stdout:
                    stripped = line.rstrip("\n")
                    stdout_lines.append(stripped)
                    self._log(self._plain.format_line(
                        stripped, self._is_root
                    ))
                    if self._console_formatter:
                        print(self._console_formatter.format_line(
                            stripped, self._is_root
                        ))
                try:
                    proc.wait(timeout=effective_timeout)
                except subprocess.TimeoutExpired:
                    proc.kill()
                    proc.wait()
                    self._log_error(
                        f"Timeout après {effective_timeout}s : "
                        f"{' '.join(command)}"
                    )
                    return self._result(
                        command, -1, "\n".join(stdout_lines), "",
                        time.monotonic() - start,
                    )
        except OSError as e:
            self._log_error(f"Erreur système : {e}")
            return self._result(
                command, -1, "\n".join(stdout_lines), str(e),
                time.monotonic() - start,
            )
        return self._result(
            command, proc.returncode, "\n".join(stdout_lines), "",
            time.monotonic() - start,
        )


def _text(value) -> str:
    """Normalise une sortie partielle de TimeoutExpired."""
    if value is None:
        return ""
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return value
