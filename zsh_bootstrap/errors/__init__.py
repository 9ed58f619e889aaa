"""Module de gestion des erreurs."""

from zsh_bootstrap.errors.base import ErrorHandler, ErrorHandlerChain
from zsh_bootstrap.errors.exceptions import (ApplicationError,
                                             ConfigurationError,
                                             SystemRequirementError,
                                             MissingDependencyError,
                                             FatalPrerequisiteMissing,
                                             InstallationError,
                                             OptionalStepFailed,
                                             ExternalCollaboratorWarning,
                                             WriteError,
                                             PatchVerificationError,
                                             VerificationFailed)
from zsh_bootstrap.errors.console_handler import ConsoleErrorHandler
from zsh_bootstrap.errors.logger_handler import LoggerErrorHandler


__all__ = [
    "ApplicationError",
    "ConfigurationError",
    "SystemRequirementError",
    "MissingDependencyError",
    "FatalPrerequisiteMissing",
    "InstallationError",
    "OptionalStepFailed",
    "ExternalCollaboratorWarning",
    "WriteError",
    "PatchVerificationError",
    "VerificationFailed",
    "ErrorHandler",
    "ErrorHandlerChain",
    "ConsoleErrorHandler",
    "LoggerErrorHandler",
]
