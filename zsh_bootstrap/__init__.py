"""
zsh-bootstrap - Installation idempotente d'un environnement zsh.

Modules disponibles:
- logging: Gestion des logs (Logger, FileLogger, ConsoleLogger,
  ChangeLogger)
- config: Chargement et validation de la configuration (SetupSettings)
- errors: Hiérarchie d'exceptions et handlers d'erreurs
- filesystem: Opérations sur fichiers (FileManager, LinuxFileManager)
- commands: Exécution de commandes système (CommandBuilder,
  LinuxCommandExecutor)
- patcher: Modification idempotente de fichiers de configuration
  (ConfigPatcher, LinuxConfigPatcher)
- snippets: Blocs de shell à insérer (ShellSnippet)
- collaborators: Paquets, plugins git, shell par défaut, Oh My Zsh
- setup: Orchestration de l'installation (ZshEnvironmentInstaller)
"""

__version__ = "1.0.0"

from zsh_bootstrap.logging import (
    Logger,
    FileLogger,
    ConsoleLogger,
    ChangeLogger,
)
from zsh_bootstrap.config import (
    ConfigLoader,
    FileConfigLoader,
    SetupSettings,
    load_settings,
)
from zsh_bootstrap.filesystem import FileManager, LinuxFileManager
from zsh_bootstrap.commands import (
    CommandBuilder,
    CommandExecutor,
    CommandResult,
    LinuxCommandExecutor,
)
from zsh_bootstrap.patcher import (
    ConfigPatcher,
    LinuxConfigPatcher,
    Expectation,
    InsertAfterMatch,
    Prepend,
    Append,
    DirectiveOutcome,
    BlockOutcome,
)
from zsh_bootstrap.snippets import ShellSnippet, PROCESS_TOOLS
from zsh_bootstrap.setup import ZshEnvironmentInstaller, SetupReport
from zsh_bootstrap.errors import (
    ApplicationError,
    FatalPrerequisiteMissing,
    PatchVerificationError,
    VerificationFailed,
    WriteError,
)

__all__ = [
    # Logging
    "Logger",
    "FileLogger",
    "ConsoleLogger",
    "ChangeLogger",
    # Config
    "ConfigLoader",
    "FileConfigLoader",
    "SetupSettings",
    "load_settings",
    # Filesystem
    "FileManager",
    "LinuxFileManager",
    # Commands
    "CommandBuilder",
    "CommandExecutor",
    "CommandResult",
    "LinuxCommandExecutor",
    # Patcher
    "ConfigPatcher",
    "LinuxConfigPatcher",
    "Expectation",
    "InsertAfterMatch",
    "Prepend",
    "Append",
    "DirectiveOutcome",
    "BlockOutcome",
    # Snippets
    "ShellSnippet",
    "PROCESS_TOOLS",
    # Setup
    "ZshEnvironmentInstaller",
    "SetupReport",
    # Errors
    "ApplicationError",
    "FatalPrerequisiteMissing",
    "PatchVerificationError",
    "VerificationFailed",
    "WriteError",
]
