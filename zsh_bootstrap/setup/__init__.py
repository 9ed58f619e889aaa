"""Orchestration de l'installation de l'environnement zsh."""

from zsh_bootstrap.setup.installer import (
    NEXT_STEPS,
    SetupReport,
    ZshEnvironmentInstaller,
)

__all__ = [
    "ZshEnvironmentInstaller",
    "SetupReport",
    "NEXT_STEPS",
]
