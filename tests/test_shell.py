"""Tests for foreground command execution."""

from __future__ import annotations

import subprocess
from unittest.mock import patch

from cmd_keeper.services.shell import EMPTY_COMMAND, ShellRunner, tokenize


class TestTokenize:
    def test_quoted_argument(self):
        assert tokenize('echo "hello world"') == ["echo", "hello world"]

    def test_single_quotes_and_escapes(self):
        assert tokenize("grep 'a b' c\\ d") == ["grep", "a b", "c d"]

    def test_no_shell_expansion(self):
        assert tokenize("echo $HOME | wc") == ["echo", "$HOME", "|", "wc"]

    def test_blank(self):
        assert tokenize("   ") == []


class TestShellRunner:
    def test_empty_command(self):
        with patch("cmd_keeper.services.shell.subprocess.run") as mock_run:
            result = ShellRunner().execute("  ")
        mock_run.assert_not_called()
        assert result.launched is False
        assert result.reason == EMPTY_COMMAND

    def test_invalid_quoting(self):
        result = ShellRunner().execute('echo "unterminated')
        assert result.launched is False
        assert result.reason.startswith("Invalid command")

    def test_runs_tokenized_args(self):
        completed = subprocess.CompletedProcess(["echo", "hello world"], 0)
        with patch("cmd_keeper.services.shell.subprocess.run", return_value=completed) as mock_run:
            result = ShellRunner().execute('echo "hello world"')
        mock_run.assert_called_once_with(["echo", "hello world"])
        assert result.launched is True
        assert result.exit_code == 0
        assert result.execution_time_ms >= 0

    def test_nonzero_exit(self):
        completed = subprocess.CompletedProcess(["false"], 1)
        with patch("cmd_keeper.services.shell.subprocess.run", return_value=completed):
            result = ShellRunner().execute("false")
        assert result.launched is True
        assert result.exit_code == 1

    def test_command_not_found(self):
        with patch("cmd_keeper.services.shell.subprocess.run", side_effect=FileNotFoundError()):
            result = ShellRunner().execute("no-such-program --flag")
        assert result.launched is False
        assert result.exit_code == -1
        assert result.reason == "Command not found: no-such-program"

    def test_permission_denied(self):
        with patch("cmd_keeper.services.shell.subprocess.run", side_effect=PermissionError()):
            result = ShellRunner().execute("./script.sh")
        assert result.reason == "Permission denied: ./script.sh"

    def test_real_process(self, tmp_path):
        target = tmp_path / "made"
        result = ShellRunner().execute(f"touch {target}")
        assert result.exit_code == 0
        assert target.exists()
