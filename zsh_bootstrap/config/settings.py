"""Modèles de configuration de l'installation.

Toutes les valeurs dérivées de l'environnement (HOME, ZSH_CUSTOM,
SHELL, USER) sont résolues une seule fois par load_settings() puis
transmises explicitement aux composants via SetupSettings.

Ordre de priorité, du plus faible au plus fort :
1. valeurs par défaut calculées depuis l'environnement ;
2. fichier de configuration TOML ou JSON ;
3. surcharges passées par la ligne de commande.
"""

import json
import os
import re
import tomllib
from pathlib import Path
from typing import Any, Mapping, Optional, Union

from dotenv import dotenv_values
from pydantic import (BaseModel, Field, ValidationError, field_validator,
                      model_validator)

from zsh_bootstrap.config.loader import FileConfigLoader, deep_merge
from zsh_bootstrap.errors.exceptions import ConfigurationError
from zsh_bootstrap.patcher.base import (BEGIN_MARKER, END_MARKER,
                                        Expectation, PatcherConfig)
from zsh_bootstrap.snippets import PROCESS_TOOLS, ShellSnippet

PLUGINS_LINE = (
    "plugins=(git zsh-autosuggestions zsh-syntax-highlighting "
    "fast-syntax-highlighting zsh-autocomplete "
    "zsh-history-substring-search)"
)
OH_MY_ZSH_INSTALLER_URL = (
    "https://raw.githubusercontent.com/ohmyzsh/ohmyzsh/master/tools/install.sh"
)


class PluginSpec(BaseModel):
    """Dépôt git d'un plugin Oh My Zsh."""

    name: str
    url: str

    model_config = {"extra": "forbid"}

    @field_validator("name")
    @classmethod
    def must_be_directory_name(cls, v: str) -> str:
        if not v or "/" in v or v in (".", ".."):
            raise ValueError(f"Nom de plugin invalide : {v!r}")
        return v


DEFAULT_PLUGINS = [
    PluginSpec(name="zsh-autosuggestions",
               url="https://github.com/zsh-users/zsh-autosuggestions.git"),
    PluginSpec(name="zsh-syntax-highlighting",
               url="https://github.com/zsh-users/zsh-syntax-highlighting.git"),
    PluginSpec(name="fast-syntax-highlighting",
               url="https://github.com/zdharma-continuum/"
                   "fast-syntax-highlighting.git"),
    PluginSpec(name="zsh-autocomplete",
               url="https://github.com/marlonrichert/zsh-autocomplete.git"),
    PluginSpec(name="zsh-history-substring-search",
               url="https://github.com/zsh-users/"
                   "zsh-history-substring-search.git"),
]


class PackageSettings(BaseModel):
    """Paquets apt requis et optionnels."""

    required: list[str] = Field(default_factory=lambda: ["zsh", "git", "curl"])
    optional: list[str] = Field(
        default_factory=lambda: [
            "zsh-autosuggestions", "zsh-syntax-highlighting"
        ]
    )

    model_config = {"extra": "forbid"}


class DirectiveSettings(BaseModel):
    """Ligne de directive à garantir.

    La ligne voulue doit elle-même correspondre à l'ancre, sans quoi
    chaque exécution insérerait une nouvelle copie.
    """

    anchor_pattern: str = r"^\s*plugins="
    desired_line: str = PLUGINS_LINE
    secondary_anchors: list[str] = Field(
        default_factory=lambda: [r"^\s*ZSH_THEME="]
    )

    model_config = {"extra": "forbid"}

    @field_validator("anchor_pattern", "secondary_anchors")
    @classmethod
    def must_compile(cls, v):
        for pattern in ([v] if isinstance(v, str) else v):
            try:
                re.compile(pattern)
            except re.error as e:
                raise ValueError(f"Motif invalide {pattern!r} : {e}")
        return v

    @model_validator(mode="after")
    def desired_line_matches_anchor(self) -> "DirectiveSettings":
        if "\n" in self.desired_line:
            raise ValueError("desired_line doit tenir sur une seule ligne")
        if not re.search(self.anchor_pattern, self.desired_line):
            raise ValueError(
                f"desired_line ne correspond pas à l'ancre "
                f"{self.anchor_pattern!r}"
            )
        return self


class BlockSettings(BaseModel):
    """Bloc marqué ajouté à la fin du fichier."""

    marker: str = PROCESS_TOOLS.marker
    content: str = PROCESS_TOOLS.content
    checks: list[str] = Field(
        default_factory=lambda: list(PROCESS_TOOLS.checks)
    )
    begin_marker: str = BEGIN_MARKER
    end_marker: str = END_MARKER

    model_config = {"extra": "forbid"}

    @model_validator(mode="after")
    def marker_in_content(self) -> "BlockSettings":
        self.snippet()
        return self

    def snippet(self) -> ShellSnippet:
        """Construit le ShellSnippet correspondant.

        Raises:
            ValueError: Si le marqueur ou une vérification est absent
                du contenu.
        """
        return ShellSnippet(
            marker=self.marker,
            content=self.content,
            checks=tuple(self.checks),
        )


class LoggingSettings(BaseModel):
    """Paramètres de journalisation."""

    level: str = "INFO"
    file: Optional[Path] = None
    format: str = "%(asctime)s - %(levelname)s - %(message)s"

    model_config = {"extra": "forbid"}

    @field_validator("level")
    @classmethod
    def known_level(cls, v: str) -> str:
        v = v.upper()
        if v not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Niveau de log inconnu : {v}")
        return v

    @field_validator("file", mode="before")
    @classmethod
    def expand_file(cls, v):
        return Path(v).expanduser() if v else None


class SetupSettings(BaseModel):
    """Configuration complète d'une exécution."""

    home: Path
    zshrc: Path
    oh_my_zsh_dir: Path
    zsh_custom: Path
    current_shell: str = ""
    user: str = ""
    oh_my_zsh_installer_url: str = OH_MY_ZSH_INSTALLER_URL
    packages: PackageSettings = Field(default_factory=PackageSettings)
    plugins: list[PluginSpec] = Field(
        default_factory=lambda: [p.model_copy() for p in DEFAULT_PLUGINS]
    )
    directive: DirectiveSettings = Field(default_factory=DirectiveSettings)
    block: BlockSettings = Field(default_factory=BlockSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    dry_run: bool = False

    model_config = {"extra": "forbid"}

    @field_validator("home", "zshrc", "oh_my_zsh_dir", "zsh_custom",
                     mode="before")
    @classmethod
    def expand_path(cls, v):
        return Path(v).expanduser()

    @property
    def plugins_dir(self) -> Path:
        """Répertoire des plugins personnalisés d'Oh My Zsh."""
        return self.zsh_custom / "plugins"

    def patcher_config(self) -> PatcherConfig:
        return PatcherConfig(
            begin_marker=self.block.begin_marker,
            end_marker=self.block.end_marker,
        )

    def expectations(self) -> list[Expectation]:
        """Attentes de la vérification finale, dans l'ordre."""
        result = [Expectation.exact_line(self.directive.desired_line)]
        result.extend(
            Expectation.substring(s)
            for s in self.block.snippet().expected_substrings()
        )
        return result


def read_environment(
    env_file: Optional[Union[str, Path]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> dict[str, str]:
    """Construit l'environnement effectif.

    Les variables déjà présentes l'emportent sur le fichier .env.

    Raises:
        ConfigurationError: Si le fichier .env est introuvable.
    """
    env = dict(os.environ if environ is None else environ)
    if env_file is not None:
        path = Path(env_file).expanduser()
        if not path.is_file():
            raise ConfigurationError(f"Fichier .env introuvable : {path}")
        for key, value in dotenv_values(path).items():
            if value is not None:
                env.setdefault(key, value)
    return env


def _environment_defaults(
    env: Mapping[str, str], raw: Mapping[str, Any]
) -> dict[str, Any]:
    home = Path(raw.get("home") or env.get("HOME") or Path.home())
    home = home.expanduser()
    oh_my_zsh_dir = Path(
        raw.get("oh_my_zsh_dir") or home / ".oh-my-zsh"
    ).expanduser()
    return {
        "home": str(home),
        "zshrc": str(home / ".zshrc"),
        "oh_my_zsh_dir": str(oh_my_zsh_dir),
        "zsh_custom": env.get("ZSH_CUSTOM") or str(oh_my_zsh_dir / "custom"),
        "current_shell": env.get("SHELL", ""),
        "user": env.get("USER") or env.get("LOGNAME", ""),
    }


def load_settings(
    config_path: Optional[Union[str, Path]] = None,
    env_file: Optional[Union[str, Path]] = None,
    environ: Optional[Mapping[str, str]] = None,
    overrides: Optional[Mapping[str, Any]] = None,
) -> SetupSettings:
    """Charge et valide la configuration d'une exécution.

    Args:
        config_path: Fichier TOML ou JSON optionnel.
        env_file: Fichier .env optionnel complétant l'environnement.
        environ: Environnement de base (défaut: os.environ).
        overrides: Surcharges prioritaires (ligne de commande).

    Returns:
        Configuration validée.

    Raises:
        ConfigurationError: Si un fichier est illisible ou si la
            configuration est invalide.
    """
    env = read_environment(env_file, environ)

    raw: dict[str, Any] = {}
    if config_path is not None:
        try:
            raw = FileConfigLoader().load(config_path)
        except (FileNotFoundError, ValueError,
                tomllib.TOMLDecodeError, json.JSONDecodeError) as e:
            raise ConfigurationError(str(e)) from e

    merged = deep_merge(_environment_defaults(env, raw), raw)
    merged = deep_merge(
        merged,
        {k: v for k, v in (overrides or {}).items() if v is not None},
    )
    try:
        return SetupSettings.model_validate(merged)
    except ValidationError as e:
        raise ConfigurationError(
            f"Configuration invalide :\n{e}"
        ) from e
