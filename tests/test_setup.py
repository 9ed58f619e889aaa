"""Tests pour l'orchestration de l'installation."""

from unittest.mock import MagicMock, patch

import pytest

from zsh_bootstrap.collaborators import (
    DefaultShellSwitcher,
    FetchStatus,
    OhMyZshInstaller,
    PackageInstaller,
    RepositoryFetcher,
    ShellSwitchStatus,
)
from zsh_bootstrap.commands import CommandExecutor, LinuxCommandExecutor
from zsh_bootstrap.config import PLUGINS_LINE, load_settings
from zsh_bootstrap.errors.exceptions import (FatalPrerequisiteMissing,
                                             InstallationError,
                                             VerificationFailed)
from zsh_bootstrap.filesystem import LinuxFileManager
from zsh_bootstrap.logging.base import Logger
from zsh_bootstrap.patcher import (BEGIN_MARKER, BlockOutcome,
                                   DirectiveOutcome, LinuxConfigPatcher)
from zsh_bootstrap.setup import NEXT_STEPS, ZshEnvironmentInstaller


# Fixtures


@pytest.fixture
def home(tmp_path):
    return tmp_path / "alice"


@pytest.fixture
def settings(home):
    home.mkdir()
    return load_settings(environ={
        "HOME": str(home), "SHELL": "/bin/bash", "USER": "alice",
    })


@pytest.fixture
def logger():
    return MagicMock(spec=Logger)


@pytest.fixture
def collaborators():
    """Collaborateurs factices en succès."""
    executor = MagicMock(spec=CommandExecutor)
    executor.which.side_effect = lambda name: f"/usr/bin/{name}"

    packages = MagicMock(spec=PackageInstaller)
    packages.ensure_installed.side_effect = (
        lambda names: {name: True for name in names}
    )

    fetcher = MagicMock(spec=RepositoryFetcher)
    fetcher.clone_or_update.return_value = FetchStatus.CLONED

    shell_switcher = MagicMock(spec=DefaultShellSwitcher)
    shell_switcher.set_default_shell.return_value = ShellSwitchStatus.CHANGED

    oh_my_zsh = MagicMock(spec=OhMyZshInstaller)
    oh_my_zsh.install.return_value = True

    return {
        "executor": executor,
        "packages": packages,
        "fetcher": fetcher,
        "shell_switcher": shell_switcher,
        "oh_my_zsh": oh_my_zsh,
    }


@pytest.fixture
def make_installer(settings, logger, collaborators):
    def factory(settings=settings):
        file_manager = LinuxFileManager(logger)
        return ZshEnvironmentInstaller(
            settings=settings,
            logger=logger,
            file_manager=file_manager,
            patcher=LinuxConfigPatcher(logger, file_manager,
                                       settings.patcher_config()),
            **collaborators,
        )
    return factory


# Tests du déroulement complet


class TestRun:
    """Tests pour ZshEnvironmentInstaller.run()."""

    def test_installation_complete(self, make_installer, settings,
                                   collaborators):
        report = make_installer().run()

        assert report.required_packages == {
            "zsh": True, "git": True, "curl": True,
        }
        assert report.oh_my_zsh_installed is True
        assert report.zshrc_created is True
        assert report.directive is DirectiveOutcome.INSERTED
        assert report.block is BlockOutcome.APPENDED
        assert report.verified is True
        assert report.shell is ShellSwitchStatus.CHANGED
        assert report.warnings == []
        assert len(report.plugins) == 5
        assert settings.plugins_dir.is_dir()

        content = settings.zshrc.read_text()
        assert PLUGINS_LINE in content.splitlines()
        assert content.count("kp() {") == 1
        collaborators["shell_switcher"].set_default_shell \
            .assert_called_once_with("/usr/bin/zsh")

    def test_ordre_des_etapes(self, make_installer, collaborators):
        manager = MagicMock()
        for name in ("packages", "oh_my_zsh", "fetcher", "shell_switcher"):
            manager.attach_mock(collaborators[name], name)

        make_installer().run()

        names = [c[0] for c in manager.mock_calls]
        assert names.index("packages.ensure_installed") < \
            names.index("oh_my_zsh.install") < \
            names.index("fetcher.clone_or_update") < \
            names.index("shell_switcher.set_default_shell")
        required, optional = [
            c.args[0] for c in collaborators["packages"]
            .ensure_installed.call_args_list
        ]
        assert required == ["zsh", "git", "curl"]
        assert optional == ["zsh-autosuggestions", "zsh-syntax-highlighting"]

    def test_destinations_des_plugins(self, make_installer, settings,
                                      collaborators):
        make_installer().run()
        calls = collaborators["fetcher"].clone_or_update.call_args_list
        assert calls[0].args == (
            "https://github.com/zsh-users/zsh-autosuggestions.git",
            settings.plugins_dir / "zsh-autosuggestions",
        )

    def test_relance_idempotente(self, make_installer, settings):
        make_installer().run()
        first = settings.zshrc.read_text()
        report = make_installer().run()
        assert settings.zshrc.read_text() == first
        assert report.directive is DirectiveOutcome.UNCHANGED
        assert report.block is BlockOutcome.ALREADY_PRESENT
        assert report.zshrc_created is False

    def test_zshrc_existant_patche(self, make_installer, settings):
        settings.zshrc.write_text(
            'ZSH_THEME="robbyrussell"\nplugins=(git)\n'
            "source $ZSH/oh-my-zsh.sh\n"
        )
        report = make_installer().run()
        lines = settings.zshrc.read_text().splitlines()
        assert report.directive is DirectiveOutcome.REPLACED
        assert lines[:3] == [
            'ZSH_THEME="robbyrussell"', PLUGINS_LINE,
            "source $ZSH/oh-my-zsh.sh",
        ]
        assert lines[4] == BEGIN_MARKER

    def test_fin_et_indications(self, make_installer, logger):
        make_installer().run()
        logger.log_info.assert_any_call("Done.")
        logger.log_info.assert_any_call(NEXT_STEPS)

    def test_sans_changement_de_shell(self, make_installer, collaborators):
        report = make_installer().run(switch_shell=False)
        assert report.shell is None
        collaborators["shell_switcher"].set_default_shell.assert_not_called()


class TestFatalPolicy:
    """Échecs fatals : l'exécution s'arrête immédiatement."""

    def test_paquet_requis_en_echec(self, make_installer, collaborators,
                                    settings):
        collaborators["packages"].ensure_installed.side_effect = (
            lambda names: {name: name != "curl" for name in names}
        )
        with pytest.raises(FatalPrerequisiteMissing, match="curl"):
            make_installer().run()
        collaborators["oh_my_zsh"].install.assert_not_called()
        assert not settings.zshrc.exists()

    def test_echec_oh_my_zsh(self, make_installer, collaborators):
        collaborators["oh_my_zsh"].install.side_effect = InstallationError(
            "installer exited with code 1"
        )
        with pytest.raises(InstallationError):
            make_installer().run()
        collaborators["fetcher"].clone_or_update.assert_not_called()

    def test_git_absent(self, make_installer, collaborators):
        collaborators["executor"].which.side_effect = (
            lambda name: None if name == "git" else f"/usr/bin/{name}"
        )
        with pytest.raises(FatalPrerequisiteMissing, match="git"):
            make_installer().run()
        collaborators["fetcher"].clone_or_update.assert_not_called()

    def test_zsh_absent(self, make_installer, collaborators):
        collaborators["executor"].which.side_effect = (
            lambda name: None if name == "zsh" else f"/usr/bin/{name}"
        )
        with pytest.raises(FatalPrerequisiteMissing, match="zsh"):
            make_installer().run()

    def test_verification_en_echec(self, make_installer, settings):
        installer = make_installer()
        with patch.object(installer.patcher, "verify",
                          side_effect=VerificationFailed("kp() {")):
            with pytest.raises(VerificationFailed):
                installer.run()


class TestWarningPolicy:
    """Avertissements : l'exécution continue."""

    def test_paquets_optionnels_en_echec(self, make_installer, collaborators,
                                         logger):
        collaborators["packages"].ensure_installed.side_effect = (
            lambda names: {name: name in ("zsh", "git", "curl")
                           for name in names}
        )
        report = make_installer().run()
        assert report.verified is True
        assert report.optional_packages == {
            "zsh-autosuggestions": False,
            "zsh-syntax-highlighting": False,
        }
        assert len(report.warnings) == 1
        assert "Continuing with git plugins" in report.warnings[0]
        logger.log_warning.assert_called_once_with(report.warnings[0])

    def test_plugins_en_echec(self, make_installer, collaborators):
        collaborators["fetcher"].clone_or_update.side_effect = [
            FetchStatus.CLONED, FetchStatus.WARNING, FetchStatus.SKIPPED,
            FetchStatus.UPDATED, FetchStatus.CLONED,
        ]
        report = make_installer().run()
        assert report.verified is True
        assert report.plugins["zsh-syntax-highlighting"] is \
            FetchStatus.WARNING
        assert len(report.warnings) == 2

    def test_shell_non_change(self, make_installer, collaborators):
        collaborators["shell_switcher"].set_default_shell.return_value = (
            ShellSwitchStatus.FAILED
        )
        report = make_installer().run()
        assert report.shell is ShellSwitchStatus.FAILED
        assert "chsh -s /usr/bin/zsh" in report.warnings[-1]


class TestDryRun:
    """Mode simulation : aucun fichier modifié."""

    @pytest.fixture
    def dry_settings(self, settings):
        return settings.model_copy(update={"dry_run": True})

    def test_aucun_fichier_modifie(self, make_installer, dry_settings):
        report = make_installer(dry_settings).run()
        assert not dry_settings.zshrc.exists()
        assert not dry_settings.plugins_dir.exists()
        assert report.directive is None
        assert report.verified is False

    def test_zsh_absent_tolere(self, make_installer, dry_settings,
                               collaborators):
        collaborators["executor"].which.side_effect = (
            lambda name: None if name == "zsh" else f"/usr/bin/{name}"
        )
        make_installer(dry_settings).run()
        collaborators["shell_switcher"].set_default_shell \
            .assert_called_once_with("/usr/bin/zsh")


class TestPatchAndVerify:
    """Tests de patch_config et verify_config seuls."""

    def test_verify_apres_patch(self, make_installer, settings):
        from zsh_bootstrap.setup import SetupReport

        installer = make_installer()
        installer.patch_config(SetupReport())
        assert installer.verify_config() is True

    def test_verify_sans_patch(self, make_installer, settings):
        settings.zshrc.write_text("plugins=(git)\n")
        with pytest.raises(VerificationFailed) as exc_info:
            make_installer().verify_config()
        assert exc_info.value.pattern == PLUGINS_LINE


def test_from_settings_assemble_les_implementations(settings, logger):
    with patch("zsh_bootstrap.commands.runner.os.geteuid",
               return_value=1000):
        installer = ZshEnvironmentInstaller.from_settings(settings, logger)
    assert isinstance(installer.executor, LinuxCommandExecutor)
    assert installer.executor.dry_run is False
    assert installer.oh_my_zsh.install_dir == settings.oh_my_zsh_dir
    assert installer.shell_switcher.user == "alice"
