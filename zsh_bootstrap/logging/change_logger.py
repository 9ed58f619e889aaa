"""Journal structuré des modifications de fichiers de configuration.

Chaque mutation du fichier cible (remplacement ou insertion de la
ligne de directive, ajout d'un bloc marqué, création du fichier) et
chaque résultat de vérification produisent un événement JSON transmis
au Logger injecté.

Respecte le principe DIP : ChangeLogger dépend de l'abstraction Logger,
non d'une implémentation concrète.
"""

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import StrEnum
from typing import Any

from zsh_bootstrap.logging.base import Logger


class ChangeEventType(StrEnum):
    """Types d'événements traçables."""

    FILE_CREATED = "file.created"
    DIRECTIVE_REPLACED = "directive.replaced"
    DIRECTIVE_INSERTED = "directive.inserted"
    DIRECTIVE_UNCHANGED = "directive.unchanged"
    BLOCK_APPENDED = "block.appended"
    BLOCK_PRESENT = "block.present"
    VERIFICATION_PASSED = "verification.passed"
    VERIFICATION_FAILED = "verification.failed"


@dataclass(frozen=True)
class ChangeEvent:
    """Événement de modification structuré.

    Attributes:
        event_type: Type d'événement (ChangeEventType).
        resource: Fichier concerné.
        details: Contexte additionnel (ligne, marqueur, stratégie...).
        severity: Niveau de sévérité (info, warning, error).
        timestamp: Horodatage ISO 8601 UTC (auto-généré).
    """

    event_type: ChangeEventType
    resource: str | None = None
    details: dict[str, Any] = field(default_factory=dict)
    severity: str = "info"
    timestamp: str = field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )


class ChangeLogger:
    """Formate chaque événement en JSON et le transmet au Logger.

    Utilisation :
        changes = ChangeLogger(file_logger)
        changes.log_event(ChangeEvent(
            event_type=ChangeEventType.DIRECTIVE_REPLACED,
            resource="/home/alice/.zshrc",
            details={"line": 12},
        ))
    """

    def __init__(self, logger: Logger) -> None:
        self._logger = logger

    def log_event(self, event: ChangeEvent) -> None:
        """Enregistre un événement en JSON structuré.

        Args:
            event: Événement à journaliser.
        """
        payload: dict[str, Any] = {
            "change_event": str(event.event_type),
            "timestamp": event.timestamp,
            "resource": event.resource,
            "severity": event.severity,
            "details": event.details,
        }
        message = json.dumps(payload, ensure_ascii=False, default=str)

        if event.severity in ("error", "critical"):
            self._logger.log_error(message)
        elif event.severity == "warning":
            self._logger.log_warning(message)
        else:
            self._logger.log_info(message)

    def record(
        self,
        event_type: ChangeEventType,
        resource: Any,
        severity: str = "info",
        **details: Any,
    ) -> None:
        """Raccourci pour construire et journaliser un événement."""
        self.log_event(ChangeEvent(
            event_type=event_type,
            resource=str(resource),
            details=details,
            severity=severity,
        ))
