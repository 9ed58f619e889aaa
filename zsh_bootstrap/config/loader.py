"""Lecture des fichiers de configuration de l'installation.

Un fichier ``zsh-bootstrap.toml`` (ou ``.json``) ne contient que les
valeurs à surcharger ; il est fusionné par-dessus les valeurs dérivées
de l'environnement avant validation :

    [packages]
    optional = []

    [[plugins]]
    name = "zsh-autosuggestions"
    url = "https://github.com/zsh-users/zsh-autosuggestions.git"
"""

import json
import tomllib
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Union

from pydantic import BaseModel

SUPPORTED_SUFFIXES = (".toml", ".json")


class ConfigLoader(ABC):
    """Interface abstraite de chargement d'un fichier de configuration."""

    @abstractmethod
    def load(
        self,
        config_path: Union[str, Path],
        schema: type | None = None
    ) -> Union[Dict[str, Any], Any]:
        """Charge un fichier de configuration.

        Args:
            config_path: Chemin du fichier (``~`` accepté).
            schema: Modèle pydantic optionnel. Sans schéma, le dict
                brut est retourné pour être fusionné.

        Raises:
            FileNotFoundError: Si le fichier n'existe pas.
            ValueError: Si l'extension n'est ni .toml ni .json.
            TypeError: Si schema n'est pas un BaseModel.
        """
        pass


class FileConfigLoader(ConfigLoader):
    """Chargeur TOML/JSON, format choisi d'après l'extension."""

    def load(
        self,
        config_path: Union[str, Path],
        schema: type | None = None
    ) -> Union[Dict[str, Any], Any]:
        path = Path(config_path).expanduser()
        if not path.is_file():
            raise FileNotFoundError(
                f"Fichier de configuration introuvable : {path}"
            )

        suffix = path.suffix.lower()
        if suffix not in SUPPORTED_SUFFIXES:
            raise ValueError(
                f"Extension non supportée: {suffix}. "
                f"Formats acceptés : {', '.join(SUPPORTED_SUFFIXES)}"
            )

        if suffix == ".toml":
            with open(path, "rb") as f:
                data = tomllib.load(f)
        else:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)

        if not isinstance(data, dict):
            raise ValueError(f"{path} doit contenir un objet, pas une liste")

        return data if schema is None else _validate(data, schema)


def _validate(data: Dict[str, Any], schema: type) -> Any:
    if not (isinstance(schema, type) and issubclass(schema, BaseModel)):
        raise TypeError(
            f"Le schema doit être une sous-classe de pydantic.BaseModel, "
            f"reçu: {schema}"
        )
    return schema.model_validate(data)


def deep_merge(
    base: Dict[str, Any],
    override: Dict[str, Any]
) -> Dict[str, Any]:
    """Fusionne récursivement deux dictionnaires sans les modifier.

    Les valeurs de ``override`` l'emportent ; les sous-dictionnaires
    présents des deux côtés sont fusionnés à leur tour. Les listes
    (plugins, paquets) sont remplacées, pas concaténées.
    """
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged
