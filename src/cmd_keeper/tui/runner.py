"""Running the selected command while the UI is suspended."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.markup import escape

from cmd_keeper.services.shell import EMPTY_COMMAND, ShellRunner
from cmd_keeper.storage.models import ExecutionResult
from cmd_keeper.tui.app import AppState
from cmd_keeper.utils.formatting import format_duration, format_execution_status

logger = logging.getLogger(__name__)


def print_summary(console: Console, result: ExecutionResult) -> None:
    elapsed = format_duration(result.execution_time_ms)
    if not result.launched:
        console.print(f"\n[red]✗ {escape(result.reason)}[/red]")
    elif result.exit_code == 0:
        console.print(f"\n[green]✓ Exited with code 0[/green] [dim]({elapsed})[/dim]")
    elif result.exit_code < 0:
        console.print(f"\n[red]✗ Terminated by signal {-result.exit_code}[/red] [dim]({elapsed})[/dim]")
    else:
        console.print(f"\n[red]✗ Exited with code {result.exit_code}[/red] [dim]({elapsed})[/dim]")


def execute_selected(
    state: AppState,
    shell_runner: ShellRunner,
    console: Console,
    wait_for_enter: bool = True,
) -> ExecutionResult | None:
    """Run the selected entry in the foreground and report back via the status line.

    Must be called with the terminal already handed back to cooked mode.
    Blocks until the child exits and, unless the command was empty, until
    the user presses Enter.
    """
    state.execute_requested = False
    entry = state.selected_entry()
    if entry is None:
        return None

    logger.info("Running command %d in the foreground", entry.id)
    console.print(f"[bold cyan]$[/bold cyan] {escape(entry.command)}")
    result = shell_runner.execute(entry.command)
    state.status_message = format_execution_status(result, entry.command)

    if result.reason == EMPTY_COMMAND:
        return result

    print_summary(console, result)
    if wait_for_enter:
        try:
            console.input("[dim]Press Enter to return to cmd-keeper...[/dim]")
        except EOFError:
            pass
    return result

