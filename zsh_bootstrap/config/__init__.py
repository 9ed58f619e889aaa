"""Module de configuration."""

from zsh_bootstrap.config.loader import (
    ConfigLoader,
    FileConfigLoader,
    deep_merge,
)
from zsh_bootstrap.config.settings import (
    OH_MY_ZSH_INSTALLER_URL,
    PLUGINS_LINE,
    BlockSettings,
    DirectiveSettings,
    LoggingSettings,
    PackageSettings,
    PluginSpec,
    SetupSettings,
    load_settings,
    read_environment,
)

__all__ = [
    "ConfigLoader",
    "FileConfigLoader",
    "deep_merge",
    "OH_MY_ZSH_INSTALLER_URL",
    "PLUGINS_LINE",
    "BlockSettings",
    "DirectiveSettings",
    "LoggingSettings",
    "PackageSettings",
    "PluginSpec",
    "SetupSettings",
    "load_settings",
    "read_environment",
]
