"""Tests for formatting utilities."""

from __future__ import annotations

from rich.console import Console

from cmd_keeper.storage.models import CommandEntry, ExecutionResult
from cmd_keeper.utils.formatting import (
    build_entries_table,
    format_duration,
    format_execution_status,
    truncate,
)


class TestTruncate:
    def test_short_text_unchanged(self):
        assert truncate("ls", 10) == "ls"

    def test_exact_length_unchanged(self):
        assert truncate("abcde", 5) == "abcde"

    def test_long_text(self):
        result = truncate("a" * 20, 10)
        assert result == "a" * 7 + "..."
        assert len(result) == 10


class TestFormatDuration:
    def test_milliseconds(self):
        assert format_duration(500) == "500ms"

    def test_seconds(self):
        assert format_duration(1500) == "1.5s"

    def test_minutes(self):
        assert format_duration(90000) == "1m 30s"


class TestExecutionStatus:
    def test_success(self):
        result = ExecutionResult(exit_code=0, execution_time_ms=12)
        assert format_execution_status(result, "ls") == "✓ 'ls' exited with code 0 (12ms)"

    def test_failure(self):
        result = ExecutionResult(exit_code=2, execution_time_ms=3)
        assert format_execution_status(result, "false") == "✗ 'false' exited with code 2 (3ms)"

    def test_signal(self):
        result = ExecutionResult(exit_code=-15, execution_time_ms=1500)
        assert format_execution_status(result, "sleep 9") == "✗ 'sleep 9' terminated by signal 15 (1.5s)"

    def test_not_launched(self):
        result = ExecutionResult(exit_code=-1, launched=False, reason="Command not found: nope")
        assert format_execution_status(result, "nope") == "✗ Command not found: nope"


class TestEntriesTable:
    def _render(self, table) -> str:
        console = Console(width=200, record=True)
        with console.capture() as capture:
            console.print(table)
        return capture.get()

    def test_rows(self):
        entries = [
            CommandEntry(1, "git status", "Show status", ["git"]),
            CommandEntry(4, "ls", "List", []),
        ]
        table = build_entries_table(entries)
        assert table.row_count == 2
        output = self._render(table)
        assert "git status" in output
        assert "-" in output

    def test_markup_is_escaped(self):
        table = build_entries_table([CommandEntry(1, "echo [bold]hi[/bold]", "")])
        assert "[bold]hi[/bold]" in self._render(table)

    def test_full_keeps_long_text(self):
        command = "echo " + "y" * 70
        assert command not in self._render(build_entries_table([CommandEntry(1, command, "")]))
        assert command in self._render(build_entries_table([CommandEntry(1, command, "")], full=True))
