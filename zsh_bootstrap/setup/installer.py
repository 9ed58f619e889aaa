"""Orchestration de l'installation de l'environnement zsh.

Les étapes s'enchaînent dans un ordre fixe. Chacune décide, à l'endroit
de l'appel, si un échec est fatal (exception propagée, arrêt immédiat)
ou s'il n'est qu'un avertissement (loggé, ajouté au rapport, exécution
poursuivie). Aucune étape n'est rejouée : l'installation complète est
idempotente et peut simplement être relancée.

Example:
    >>> settings = load_settings()
    >>> installer = ZshEnvironmentInstaller.from_settings(settings, logger)
    >>> report = installer.run()
    >>> report.warnings
    []
"""

from dataclasses import dataclass, field
from typing import Optional

from zsh_bootstrap.collaborators import (
    AptPackageInstaller,
    ChshShellSwitcher,
    DefaultShellSwitcher,
    FetchStatus,
    GitRepositoryFetcher,
    OhMyZshInstaller,
    PackageInstaller,
    RepositoryFetcher,
    ShellSwitchStatus,
)
from zsh_bootstrap.commands import (
    AnsiCommandFormatter,
    CommandExecutor,
    LinuxCommandExecutor,
)
from zsh_bootstrap.config.settings import SetupSettings
from zsh_bootstrap.errors.exceptions import (ExternalCollaboratorWarning,
                                             FatalPrerequisiteMissing,
                                             OptionalStepFailed)
from zsh_bootstrap.filesystem import FileManager, LinuxFileManager
from zsh_bootstrap.logging.base import Logger
from zsh_bootstrap.logging.change_logger import ChangeLogger
from zsh_bootstrap.patcher import (
    BlockOutcome,
    ConfigPatcher,
    DirectiveOutcome,
    LinuxConfigPatcher,
    default_fallbacks,
)

NEXT_STEPS = (
    "Next:\n"
    "  - Start a new terminal session, or run: "
    "zsh -i -c 'source ~/.zshrc; echo OK'\n"
    "  - Inside zsh you can test: type kp fp sr"
)


@dataclass
class SetupReport:
    """Bilan d'une exécution, étape par étape."""

    required_packages: dict[str, bool] = field(default_factory=dict)
    oh_my_zsh_installed: bool = False
    zshrc_created: bool = False
    optional_packages: dict[str, bool] = field(default_factory=dict)
    plugins: dict[str, FetchStatus] = field(default_factory=dict)
    directive: Optional[DirectiveOutcome] = None
    block: Optional[BlockOutcome] = None
    verified: bool = False
    shell: Optional[ShellSwitchStatus] = None
    warnings: list[str] = field(default_factory=list)


class ZshEnvironmentInstaller:
    """Enchaîne les étapes d'installation de l'environnement zsh.

    Attributes:
        settings: Configuration explicite de l'exécution.
        logger: Logger des étapes.
    """

    def __init__(
        self,
        settings: SetupSettings,
        logger: Logger,
        executor: CommandExecutor,
        file_manager: FileManager,
        patcher: ConfigPatcher,
        packages: PackageInstaller,
        fetcher: RepositoryFetcher,
        shell_switcher: DefaultShellSwitcher,
        oh_my_zsh: OhMyZshInstaller,
    ) -> None:
        self.settings = settings
        self.logger = logger
        self.executor = executor
        self.file_manager = file_manager
        self.patcher = patcher
        self.packages = packages
        self.fetcher = fetcher
        self.shell_switcher = shell_switcher
        self.oh_my_zsh = oh_my_zsh

    @classmethod
    def from_settings(
        cls,
        settings: SetupSettings,
        logger: Logger,
        changes: Optional[ChangeLogger] = None,
        executor: Optional[CommandExecutor] = None,
    ) -> "ZshEnvironmentInstaller":
        """Assemble les implémentations Linux à partir de la config."""
        executor = executor or LinuxCommandExecutor(
            logger=logger,
            dry_run=settings.dry_run,
            console_formatter=AnsiCommandFormatter(),
        )
        file_manager = LinuxFileManager(logger)
        return cls(
            settings=settings,
            logger=logger,
            executor=executor,
            file_manager=file_manager,
            patcher=LinuxConfigPatcher(
                logger, file_manager, settings.patcher_config(), changes
            ),
            packages=AptPackageInstaller(executor, logger),
            fetcher=GitRepositoryFetcher(executor, logger),
            shell_switcher=ChshShellSwitcher(
                executor, logger, settings.current_shell, settings.user
            ),
            oh_my_zsh=OhMyZshInstaller(
                executor, logger, settings.oh_my_zsh_dir,
                settings.oh_my_zsh_installer_url,
            ),
        )

    @property
    def dry_run(self) -> bool:
        return self.settings.dry_run

    def _warn(self, report: SetupReport, error: Exception) -> None:
        self.logger.log_warning(str(error))
        report.warnings.append(str(error))

    def _require_tool(self, name: str) -> str:
        path = self.executor.which(name)
        if path is None:
            raise FatalPrerequisiteMissing(
                f"{name} is required but not found"
            )
        return path

    def install_required_packages(self, report: SetupReport) -> None:
        required = self.settings.packages.required
        self.logger.log_info(
            f"Installing prerequisites ({', '.join(required)})..."
        )
        report.required_packages = self.packages.ensure_installed(required)
        failed = [n for n, ok in report.required_packages.items() if not ok]
        if failed:
            raise FatalPrerequisiteMissing(
                f"Required packages could not be installed: "
                f"{' '.join(failed)}"
            )

    def install_optional_packages(self, report: SetupReport) -> None:
        optional = self.settings.packages.optional
        if not optional:
            return
        self.logger.log_info(
            "Installing optional zsh plugin packages from apt "
            "(if available)..."
        )
        report.optional_packages = self.packages.ensure_installed(optional)
        failed = [n for n, ok in report.optional_packages.items() if not ok]
        if failed:
            self._warn(report, OptionalStepFailed(
                f"Apt plugin packages not installed ({' '.join(failed)}); "
                "maybe not available on this distro. "
                "Continuing with git plugins."
            ))

    def fetch_plugins(self, report: SetupReport) -> None:
        self._require_tool("git")
        plugins_dir = self.settings.plugins_dir
        if not self.dry_run:
            plugins_dir.mkdir(parents=True, exist_ok=True)

        self.logger.log_info(
            f"Installing/Updating Oh My Zsh plugins in: {plugins_dir}"
        )
        for plugin in self.settings.plugins:
            status = self.fetcher.clone_or_update(
                plugin.url, plugins_dir / plugin.name
            )
            report.plugins[plugin.name] = status
            if status in (FetchStatus.WARNING, FetchStatus.SKIPPED):
                report.warnings.append(
                    str(ExternalCollaboratorWarning(
                        f"Plugin {plugin.name}: {status}"
                    ))
                )

    def patch_config(self, report: SetupReport) -> None:
        """Applique la directive et le bloc puis vérifie le fichier."""
        zshrc = self.settings.zshrc
        if self.dry_run:
            self.logger.log_info(f"[dry-run] Skipping changes to {zshrc}")
            return

        directive = self.settings.directive
        report.directive = self.patcher.ensure_directive_line(
            zshrc,
            directive.anchor_pattern,
            directive.desired_line,
            default_fallbacks(directive.secondary_anchors),
        )
        block = self.settings.block
        report.block = self.patcher.ensure_marked_block(
            zshrc, block.marker, block.content
        )
        report.verified = self.verify_config()

    def verify_config(self) -> bool:
        """Vérifie la directive et le bloc. VerificationFailed est fatal."""
        return self.patcher.verify(
            self.settings.zshrc, self.settings.expectations()
        )

    def switch_default_shell(self, report: SetupReport) -> None:
        zsh_path = self.executor.which("zsh")
        if zsh_path is None:
            if not self.dry_run:
                raise FatalPrerequisiteMissing("zsh is not installed")
            zsh_path = "/usr/bin/zsh"
        report.shell = self.shell_switcher.set_default_shell(zsh_path)
        if report.shell is ShellSwitchStatus.FAILED:
            report.warnings.append(str(ExternalCollaboratorWarning(
                f"Default shell not changed; run: chsh -s {zsh_path}"
            )))

    def run(self, switch_shell: bool = True) -> SetupReport:
        """Exécute l'installation complète.

        Raises:
            FatalPrerequisiteMissing: Outil ou paquet requis absent.
            InstallationError: Échec de l'installeur Oh My Zsh.
            WriteError: Fichier de configuration non inscriptible.
            PatchVerificationError: Fichier pas dans l'état attendu.
        """
        report = SetupReport()

        self.install_required_packages(report)

        # Oh My Zsh d'abord : son installeur crée ~/.zshrc
        report.oh_my_zsh_installed = self.oh_my_zsh.install()

        if not self.dry_run:
            report.zshrc_created = self.file_manager.ensure_exists(
                self.settings.zshrc
            )

        self.install_optional_packages(report)
        self.fetch_plugins(report)
        self.patch_config(report)

        if switch_shell:
            self.switch_default_shell(report)

        self.logger.log_info("Done.")
        self.logger.log_info(NEXT_STEPS)
        return report
