"""Text formatting helpers for tables, status lines and summaries."""

from __future__ import annotations

from rich.markup import escape
from rich.table import Table

from cmd_keeper.storage.models import CommandEntry, ExecutionResult

COMMAND_WIDTH = 50
DESCRIPTION_WIDTH = 40
TAGS_WIDTH = 20


def truncate(text: str, max_len: int) -> str:
    """Cut ``text`` to ``max_len`` characters, ending in '...' when cut."""
    if len(text) <= max_len:
        return text
    return text[: max(max_len - 3, 0)] + "..."


def format_duration(ms: int) -> str:
    """Format milliseconds to human-readable duration."""
    if ms < 1000:
        return f"{ms}ms"
    elif ms < 60000:
        return f"{ms / 1000:.1f}s"
    else:
        minutes = ms // 60000
        seconds = (ms % 60000) // 1000
        return f"{minutes}m {seconds}s"


def format_execution_status(result: ExecutionResult, command: str) -> str:
    """One-line summary of a foreground run, used as TUI status text."""
    if not result.launched:
        return f"✗ {result.reason}"

    elapsed = format_duration(result.execution_time_ms)
    if result.exit_code == 0:
        return f"✓ '{command}' exited with code 0 ({elapsed})"
    if result.exit_code < 0:
        return f"✗ '{command}' terminated by signal {-result.exit_code} ({elapsed})"
    return f"✗ '{command}' exited with code {result.exit_code} ({elapsed})"


def build_entries_table(entries: list[CommandEntry], full: bool = False, title: str | None = None) -> Table:
    """Rich table of entries for the list and search commands."""
    table = Table(title=title)
    table.add_column("ID", style="cyan", justify="right")
    table.add_column("Command", style="bold", overflow="fold")
    table.add_column("Description", overflow="fold")
    table.add_column("Tags", style="green", overflow="fold")

    for entry in entries:
        command = entry.command
        description = entry.description
        tags = entry.tags_display()
        if not full:
            command = truncate(command, COMMAND_WIDTH)
            description = truncate(description, DESCRIPTION_WIDTH)
            tags = truncate(tags, TAGS_WIDTH)
        table.add_row(str(entry.id), escape(command), escape(description), escape(tags))

    return table
