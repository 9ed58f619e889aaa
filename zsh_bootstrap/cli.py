"""Interface en ligne de commande ``zsh-bootstrap``.

Commandes :
- ``run`` : installation complète (paquets, Oh My Zsh, plugins,
  ~/.zshrc, shell par défaut) ;
- ``patch`` : directive, bloc marqué et vérification de ~/.zshrc ;
- ``verify`` : vérification seule.

Codes de sortie : 0 succès, 2 prérequis manquant, 3 vérification
échouée, 1 toute autre erreur.
"""

from pathlib import Path
from typing import Any, Callable, Optional

import click

from zsh_bootstrap import __version__
from zsh_bootstrap.config.settings import SetupSettings, load_settings
from zsh_bootstrap.errors import (
    ApplicationError,
    ConsoleErrorHandler,
    ErrorHandlerChain,
    FatalPrerequisiteMissing,
    LoggerErrorHandler,
    PatchVerificationError,
)
from zsh_bootstrap.logging import (
    ChangeLogger,
    ConsoleLogger,
    FileLogger,
    Logger,
)
from zsh_bootstrap.setup import SetupReport, ZshEnvironmentInstaller

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_MISSING_PREREQUISITE = 2
EXIT_VERIFICATION_FAILED = 3


def exit_code_for(error: Exception) -> int:
    """Code de sortie associé à une erreur fatale."""
    if isinstance(error, FatalPrerequisiteMissing):
        return EXIT_MISSING_PREREQUISITE
    if isinstance(error, PatchVerificationError):
        return EXIT_VERIFICATION_FAILED
    return EXIT_FAILURE


def build_loggers(
    settings: SetupSettings,
) -> tuple[Logger, Optional[ChangeLogger]]:
    """Construit le logger principal et le journal des modifications.

    Sans fichier de log, tout va sur la console et les événements
    JSON ne sont pas journalisés. Avec un fichier, la console reste
    active et les événements ne sont écrits que dans le fichier.
    """
    options = settings.logging
    if options.file is None:
        return ConsoleLogger(level=options.level), None

    log_file = str(options.file)
    logger = FileLogger(
        log_file,
        level=options.level,
        log_format=options.format,
        console_output=True,
    )
    audit = FileLogger(
        log_file,
        level=options.level,
        log_format=options.format,
        name=f"zsh_bootstrap.changes.{log_file}",
    )
    return logger, ChangeLogger(audit)


def _execute(
    ctx: click.Context,
    overrides: dict[str, Any],
    action: Callable[[ZshEnvironmentInstaller], Any],
) -> Any:
    options = ctx.obj
    try:
        settings = load_settings(
            config_path=options["config"],
            env_file=options["env_file"],
            overrides={**options["overrides"], **overrides},
        )
    except ApplicationError as e:
        ErrorHandlerChain().add_handler(
            ConsoleErrorHandler()
        ).handle_and_exit(e, exit_code_for(e))

    logger, changes = build_loggers(settings)
    chain = ErrorHandlerChain().add_handler(ConsoleErrorHandler())
    if settings.logging.file is not None:
        chain.add_handler(LoggerErrorHandler(logger))

    try:
        installer = ZshEnvironmentInstaller.from_settings(
            settings, logger, changes
        )
        return action(installer)
    except Exception as e:
        chain.handle_and_exit(e, exit_code_for(e))


@click.group()
@click.version_option(__version__, prog_name="zsh-bootstrap")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Fichier de configuration TOML ou JSON.",
)
@click.option(
    "--env-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Fichier .env complétant l'environnement.",
)
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Fichier de log (la console reste active).",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"],
                      case_sensitive=False),
    default=None,
    help="Niveau minimal de log.",
)
@click.pass_context
def cli_main(
    ctx: click.Context,
    config_path: Optional[Path],
    env_file: Optional[Path],
    log_file: Optional[Path],
    log_level: Optional[str],
) -> None:
    """Installe et configure zsh, Oh My Zsh et ses plugins."""
    logging_overrides = {
        key: value
        for key, value in (("file", log_file), ("level", log_level))
        if value is not None
    }
    ctx.obj = {
        "config": config_path,
        "env_file": env_file,
        "overrides": (
            {"logging": logging_overrides} if logging_overrides else {}
        ),
    }


@cli_main.command()
@click.option("--dry-run", is_flag=True,
              help="Affiche les commandes externes sans les exécuter.")
@click.option("--skip-shell", is_flag=True,
              help="Ne change pas le shell par défaut.")
@click.pass_context
def run(ctx: click.Context, dry_run: bool, skip_shell: bool) -> None:
    """Installation complète de l'environnement zsh."""
    report = _execute(
        ctx,
        {"dry_run": True if dry_run else None},
        lambda installer: installer.run(switch_shell=not skip_shell),
    )
    # Chaque avertissement a déjà été loggé au moment où il est survenu.
    if report.warnings:
        click.echo(f"{len(report.warnings)} warning(s), see above.",
                   err=True)


@cli_main.command()
@click.option(
    "--zshrc",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Fichier cible (défaut: ~/.zshrc).",
)
@click.pass_context
def patch(ctx: click.Context, zshrc: Optional[Path]) -> None:
    """Applique la directive plugins et le bloc marqué puis vérifie."""
    report = _execute(
        ctx,
        {"zshrc": zshrc, "dry_run": False},
        lambda installer: _patch(installer),
    )
    click.echo(f"plugins: {report.directive}, block: {report.block}")


def _patch(installer: ZshEnvironmentInstaller) -> SetupReport:
    report = SetupReport()
    installer.patch_config(report)
    return report


@cli_main.command()
@click.option(
    "--zshrc",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Fichier cible (défaut: ~/.zshrc).",
)
@click.pass_context
def verify(ctx: click.Context, zshrc: Optional[Path]) -> None:
    """Vérifie que ~/.zshrc contient la directive et le bloc."""
    _execute(ctx, {"zshrc": zshrc},
             lambda installer: installer.verify_config())
    click.echo("OK")


def main() -> None:
    cli_main(prog_name="zsh-bootstrap")
