"""Collaborateurs externes : paquets, dépôts de plugins, shell par
défaut et installeur Oh My Zsh."""

from zsh_bootstrap.collaborators.oh_my_zsh import (
    INSTALLER_ENV,
    OhMyZshInstaller,
)
from zsh_bootstrap.collaborators.packages import (
    AptPackageInstaller,
    PackageInstaller,
)
from zsh_bootstrap.collaborators.repositories import (
    FetchStatus,
    GitRepositoryFetcher,
    RepositoryFetcher,
)
from zsh_bootstrap.collaborators.shell import (
    ChshShellSwitcher,
    DefaultShellSwitcher,
    ShellSwitchStatus,
)

__all__ = [
    "PackageInstaller",
    "AptPackageInstaller",
    "RepositoryFetcher",
    "GitRepositoryFetcher",
    "FetchStatus",
    "DefaultShellSwitcher",
    "ChshShellSwitcher",
    "ShellSwitchStatus",
    "OhMyZshInstaller",
    "INSTALLER_ENV",
]
