"""Tests pour le module commands."""

import subprocess
from unittest.mock import MagicMock, patch

import pytest

from zsh_bootstrap.commands import (
    AnsiCommandFormatter,
    CommandBuilder,
    CommandResult,
    LinuxCommandExecutor,
    PlainCommandFormatter,
)
from zsh_bootstrap.errors.exceptions import FatalPrerequisiteMissing
from zsh_bootstrap.logging.base import Logger


RUNNER = "zsh_bootstrap.commands.runner"


def make_executor(is_root=False, **kwargs):
    """Crée un exécuteur avec un uid simulé."""
    with patch(f"{RUNNER}.os.geteuid", return_value=0 if is_root else 1000):
        return LinuxCommandExecutor(**kwargs)


# --- Tests CommandResult ---


class TestCommandResult:
    """Tests pour la dataclass CommandResult."""

    def test_frozen(self):
        """Test que la dataclass est immuable."""
        result = CommandResult(
            command=["ls"], return_code=0, stdout="", stderr="",
            success=True, duration=0.0,
        )
        with pytest.raises(AttributeError):
            result.return_code = 1

    def test_executed_as_root_defaut_faux(self):
        result = CommandResult(
            command=["ls"], return_code=0, stdout="", stderr="",
            success=True, duration=0.0,
        )
        assert result.executed_as_root is False


# --- Tests CommandBuilder ---


class TestCommandBuilder:
    """Tests pour CommandBuilder."""

    def test_build_programme_seul(self):
        assert CommandBuilder("git").build() == ["git"]

    def test_clone_superficiel(self):
        command = (
            CommandBuilder("git")
            .with_args(["clone"])
            .with_option("--depth", "1")
            .with_args(["https://example.org/p.git", "/tmp/p"])
            .build()
        )
        assert command == [
            "git", "clone", "--depth", "1",
            "https://example.org/p.git", "/tmp/p",
        ]

    def test_with_flag_if(self):
        command = (
            CommandBuilder("apt-get")
            .with_flag("install")
            .with_flag_if("-y", True)
            .with_flag_if("-q", False)
            .build()
        )
        assert command == ["apt-get", "install", "-y"]

    def test_with_option_if_valeur_none(self):
        command = (
            CommandBuilder("chsh")
            .with_option_if("-s", None)
            .with_option_if("-s", "/usr/bin/zsh", condition=False)
            .build()
        )
        assert command == ["chsh"]

    def test_build_retourne_une_copie(self):
        builder = CommandBuilder("ls")
        builder.build().append("-la")
        assert builder.build() == ["ls"]

    @pytest.mark.parametrize("program", ["", "   "])
    def test_programme_vide_leve_erreur(self, program):
        with pytest.raises(ValueError):
            CommandBuilder(program)


# --- Tests LinuxCommandExecutor.run ---


class TestLinuxCommandExecutorRun:
    """Tests pour la méthode run() de LinuxCommandExecutor."""

    def setup_method(self):
        """Initialise les mocks pour chaque test."""
        self.mock_logger = MagicMock(spec=Logger)
        self.executor = make_executor(logger=self.mock_logger)

    @patch(f"{RUNNER}.subprocess.run")
    def test_run_commande_reussie(self, mock_run):
        mock_run.return_value = MagicMock(
            returncode=0, stdout="sortie", stderr="",
        )
        result = self.executor.run(["echo", "test"])

        assert result.success is True
        assert result.stdout == "sortie"
        assert result.command == ["echo", "test"]
        assert result.duration >= 0
        assert mock_run.call_args[1]["capture_output"] is True

    @patch(f"{RUNNER}.subprocess.run")
    def test_run_commande_echouee(self, mock_run):
        mock_run.return_value = MagicMock(
            returncode=1, stdout="", stderr="erreur",
        )
        result = self.executor.run(["false"])

        assert result.success is False
        assert result.return_code == 1
        assert result.stderr == "erreur"
        self.mock_logger.log_warning.assert_called_once()

    @patch(f"{RUNNER}.subprocess.run")
    def test_run_timeout(self, mock_run):
        mock_run.side_effect = subprocess.TimeoutExpired(
            cmd=["sleep", "100"], timeout=5, output=b"partiel",
        )
        result = self.executor.run(["sleep", "100"], timeout=5)

        assert result.success is False
        assert result.return_code == -1
        assert result.stdout == "partiel"

    @patch(f"{RUNNER}.subprocess.run")
    def test_run_commande_introuvable(self, mock_run):
        mock_run.side_effect = FileNotFoundError("inexistant")
        result = self.executor.run(["inexistant"])

        assert result.success is False
        assert result.return_code == -1
        assert "inexistant" in result.stderr

    @patch(f"{RUNNER}.subprocess.run")
    def test_run_log_commande(self, mock_run):
        mock_run.return_value = MagicMock(returncode=0, stdout="", stderr="")
        self.executor.run(["ls", "-la"])

        message = self.mock_logger.log_debug.call_args[0][0]
        assert message == "[user] Exécution : ls -la"

    @patch(f"{RUNNER}.subprocess.run")
    @patch.dict("os.environ", {"EXISTING": "val"})
    def test_env_fusionne(self, mock_run):
        mock_run.return_value = MagicMock(returncode=0, stdout="", stderr="")
        self.executor.run(["sh"], env={"RUNZSH": "no"})

        env = mock_run.call_args[1]["env"]
        assert env["RUNZSH"] == "no"
        assert env["EXISTING"] == "val"

    @patch(f"{RUNNER}.subprocess.run")
    def test_aucun_env_passe_none(self, mock_run):
        mock_run.return_value = MagicMock(returncode=0, stdout="", stderr="")
        self.executor.run(["ls"])
        assert mock_run.call_args[1]["env"] is None

    @patch(f"{RUNNER}.subprocess.run")
    def test_timeout_par_defaut(self, mock_run):
        mock_run.return_value = MagicMock(returncode=0, stdout="", stderr="")
        executor = make_executor(default_timeout=30)
        executor.run(["ls"])
        assert mock_run.call_args[1]["timeout"] == 30


# --- Tests privileged / sudo ---


class TestPrivileged:
    """Tests de l'élévation via sudo."""

    @patch(f"{RUNNER}.shutil.which", return_value="/usr/bin/sudo")
    @patch(f"{RUNNER}.subprocess.run")
    def test_prefixe_sudo_si_non_root(self, mock_run, _which):
        mock_run.return_value = MagicMock(returncode=0, stdout="", stderr="")
        result = make_executor().run(
            ["apt-get", "update", "-y"], privileged=True
        )
        assert mock_run.call_args[0][0] == [
            "sudo", "apt-get", "update", "-y",
        ]
        assert result.command[0] == "sudo"

    @patch(f"{RUNNER}.subprocess.run")
    def test_pas_de_sudo_si_root(self, mock_run):
        mock_run.return_value = MagicMock(returncode=0, stdout="", stderr="")
        result = make_executor(is_root=True).run(
            ["apt-get", "update", "-y"], privileged=True
        )
        assert mock_run.call_args[0][0] == ["apt-get", "update", "-y"]
        assert result.executed_as_root is True

    @patch(f"{RUNNER}.shutil.which", return_value=None)
    @patch(f"{RUNNER}.subprocess.run")
    def test_sudo_absent(self, mock_run, _which):
        with pytest.raises(FatalPrerequisiteMissing, match="sudo"):
            make_executor().run(["apt-get", "update"], privileged=True)
        mock_run.assert_not_called()

    @patch(f"{RUNNER}.subprocess.run")
    def test_non_privilegie_sans_sudo(self, mock_run):
        mock_run.return_value = MagicMock(returncode=0, stdout="", stderr="")
        make_executor().run(["chsh", "-s", "/usr/bin/zsh"])
        assert mock_run.call_args[0][0] == ["chsh", "-s", "/usr/bin/zsh"]

    def test_which(self):
        with patch(f"{RUNNER}.shutil.which", return_value="/usr/bin/git"):
            assert make_executor().which("git") == "/usr/bin/git"


# --- Tests run_streaming ---


class TestLinuxCommandExecutorStreaming:
    """Tests pour run_streaming()."""

    def setup_method(self):
        self.mock_logger = MagicMock(spec=Logger)
        self.executor = make_executor(logger=self.mock_logger)

    def _make_mock_proc(self, stdout_lines, returncode=0):
        """Crée un mock de Popen configuré."""
        mock_proc = MagicMock()
        mock_proc.stdout = iter(stdout_lines)
        mock_proc.returncode = returncode
        mock_proc.wait.return_value = None
        mock_proc.__enter__ = MagicMock(return_value=mock_proc)
        mock_proc.__exit__ = MagicMock(return_value=False)
        return mock_proc

    @patch(f"{RUNNER}.subprocess.Popen")
    def test_streaming_capture_sortie(self, mock_popen):
        mock_popen.return_value = self._make_mock_proc(
            ["ligne1\n", "ligne2\n"],
        )
        result = self.executor.run_streaming(["cmd"])

        assert result.success is True
        assert result.stdout == "ligne1\nligne2"
        assert mock_popen.call_args[1]["stderr"] == subprocess.STDOUT

    @patch(f"{RUNNER}.subprocess.Popen")
    def test_streaming_log_chaque_ligne(self, mock_popen):
        mock_popen.return_value = self._make_mock_proc(
            ["ligne1\n", "ligne2\n", "ligne3\n"],
        )
        self.executor.run_streaming(["cmd"])

        # 1 appel pour le lancement + 3 lignes
        assert self.mock_logger.log_debug.call_count == 4

    @patch(f"{RUNNER}.subprocess.Popen")
    def test_streaming_echec(self, mock_popen):
        mock_popen.return_value = self._make_mock_proc([], returncode=100)
        result = self.executor.run_streaming(["apt-get", "install", "x"])
        assert result.success is False
        assert result.return_code == 100

    @patch(f"{RUNNER}.subprocess.Popen")
    def test_streaming_timeout(self, mock_popen):
        mock_proc = self._make_mock_proc(["partiel\n"])
        mock_proc.wait.side_effect = [
            subprocess.TimeoutExpired(cmd=["cmd"], timeout=5),
            None,
        ]
        mock_popen.return_value = mock_proc

        result = self.executor.run_streaming(["cmd"], timeout=5)

        assert result.return_code == -1
        assert "partiel" in result.stdout
        mock_proc.kill.assert_called_once()

    @patch(f"{RUNNER}.subprocess.Popen")
    def test_streaming_programme_introuvable(self, mock_popen):
        mock_popen.side_effect = FileNotFoundError("sh")
        result = self.executor.run_streaming(["sh"])
        assert result.return_code == -1

    @patch(f"{RUNNER}.subprocess.Popen")
    def test_streaming_affiche_sur_la_console(self, mock_popen, capsys):
        mock_popen.return_value = self._make_mock_proc(["sortie\n"])
        executor = make_executor(console_formatter=PlainCommandFormatter())
        executor.run_streaming(["cmd"])
        out = capsys.readouterr().out
        assert "[user] Exécution : cmd" in out
        assert "sortie" in out


# --- Tests dry-run ---


class TestDryRun:
    """Tests du mode simulation."""

    @patch(f"{RUNNER}.subprocess.run")
    def test_dry_run_pas_execution(self, mock_run):
        result = make_executor(dry_run=True).run(["rm", "-rf", "/tmp/x"])
        mock_run.assert_not_called()
        assert result.success is True
        assert result.stdout == ""

    @patch(f"{RUNNER}.subprocess.Popen")
    def test_dry_run_streaming(self, mock_popen):
        result = make_executor(dry_run=True).run_streaming(["sh", "-c", "x"])
        mock_popen.assert_not_called()
        assert result.success is True

    def test_dry_run_log_commande(self):
        logger = MagicMock(spec=Logger)
        make_executor(logger=logger, dry_run=True).run(["git", "pull"])
        assert logger.log_debug.call_args[0][0] == "[user] [dry-run] git pull"

    @patch(f"{RUNNER}.shutil.which", return_value="/usr/bin/sudo")
    def test_dry_run_privilegie_garde_sudo(self, _which):
        result = make_executor(dry_run=True).run(
            ["apt-get", "install", "-y", "zsh"], privileged=True
        )
        assert result.command[:2] == ["sudo", "apt-get"]

    def test_propriete_dry_run(self):
        assert make_executor(dry_run=True).dry_run is True
        assert make_executor().dry_run is False


# --- Tests formatters ---


class TestPlainCommandFormatter:
    """Tests pour PlainCommandFormatter."""

    @pytest.fixture
    def formatter(self):
        return PlainCommandFormatter()

    def test_format_start_root(self, formatter):
        assert formatter.format_start(["apt-get", "update"], True) == (
            "[ROOT] Exécution : apt-get update"
        )

    def test_format_start_cite_les_arguments(self, formatter):
        message = formatter.format_start(["sh", "-c", "echo a b"], False)
        assert message == "[user] Exécution : sh -c 'echo a b'"

    def test_format_dry_run(self, formatter):
        assert formatter.format_dry_run(["git", "pull"], False) == (
            "[user] [dry-run] git pull"
        )

    def test_format_line_inchangee(self, formatter):
        assert formatter.format_line("ligne", True) == "ligne"


class TestAnsiCommandFormatter:
    """Tests pour AnsiCommandFormatter."""

    @pytest.fixture
    def formatter(self):
        return AnsiCommandFormatter()

    def test_style_root_avec_tty(self, formatter):
        with patch.object(formatter, "_is_tty", return_value=True):
            message = formatter.format_start(["ls"], True)
        assert message.startswith(AnsiCommandFormatter.ROOT_STYLE)
        assert message.endswith(AnsiCommandFormatter.RESET)

    def test_style_user_avec_tty(self, formatter):
        with patch.object(formatter, "_is_tty", return_value=True):
            message = formatter.format_start(["ls"], False)
        assert message.startswith(AnsiCommandFormatter.USER_STYLE)

    def test_sans_tty_pas_de_codes_ansi(self, formatter):
        with patch.object(formatter, "_is_tty", return_value=False):
            message = formatter.format_dry_run(["ls"], False)
        assert "\033[" not in message
